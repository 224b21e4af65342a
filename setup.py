from setuptools import setup, find_packages

install_requires = [
    'boto3',
    'celery',
    'Django',
    'djangorestframework',
    'hashids',
    'redis',
]
tests_require = ['pytest', 'pytest-django', 'django-dynamic-fixture', 'mock']

setup(
    name='ddns-registrar',
    version='1.0.0',
    description="Dynamic DNS registration service backed by Route 53",
    install_requires=install_requires,
    tests_require=tests_require,
    packages=find_packages(include=['ddns', 'ddns.*', 'django_project', 'django_project.*']),
    extras_require={
        'test': tests_require
    },
    classifiers=[
        'Environment :: Web Environment',
        'Framework :: Django',
        'Intended Audience :: System Administrators',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ]
)
