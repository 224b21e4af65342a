from django.conf import settings
from rest_framework import status, views
from rest_framework.generics import ListAPIView
from rest_framework.response import Response

from ddns.apps import get_engine
from ddns.engine import NewRegistration
from ddns.models import Host
from ddns.serializers import HostSerializer, RegistrationSerializer, TokenSerializer


def client_ip(request):
    if getattr(settings, 'DDNS_TRUST_X_FORWARDED_FOR', False):
        forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
        if forwarded:
            return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


class Register(views.APIView):
    permission_classes = ()

    def post(self, request, format=None):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registration = serializer.to_request(client_ip(request))
        token = get_engine().submit(registration)
        if isinstance(registration, NewRegistration):
            return Response({'token': token}, status=status.HTTP_201_CREATED)
        return Response({'token': token})


class Update(views.APIView):
    permission_classes = ()

    def post(self, request, format=None):
        serializer = TokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        get_engine().refresh(data['token'], data['ip'] or client_ip(request))
        return Response({'status': 'ok'})


class Delete(views.APIView):
    permission_classes = ()

    def post(self, request, format=None):
        serializer = TokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        get_engine().delete(serializer.validated_data['token'])
        return Response(status=status.HTTP_204_NO_CONTENT)


class HostDetail(views.APIView):
    permission_classes = ()

    def delete(self, request, token, format=None):
        get_engine().delete(token)
        return Response(status=status.HTTP_204_NO_CONTENT)


class HostList(ListAPIView):
    serializer_class = HostSerializer
    queryset = Host.objects.all()

    def get_serializer_context(self):
        context = super(HostList, self).get_serializer_context()
        context['engine'] = get_engine()
        return context


class HealthCheck(views.APIView):
    permission_classes = ()

    def get(self, request, format=None):
        return Response({'status': 'ok'})
