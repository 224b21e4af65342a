from django.urls import path

from ddns import views


urlpatterns = [
    path('register', views.Register.as_view(), name='register'),
    path('update', views.Update.as_view(), name='update'),
    path('delete', views.Delete.as_view(), name='delete'),
    path('hosts', views.HostList.as_view(), name='host-list'),
    path('hosts/<str:token>', views.HostDetail.as_view(), name='host-detail'),
]
