# pylint: disable=no-member,unused-argument,protected-access,redefined-outer-name
from datetime import timedelta
import random
import string

from django.apps import apps
from django.contrib.auth import get_user_model
import botocore.exceptions
import pytest
from mock import patch
from rest_framework.test import APIClient
from django_dynamic_fixture import G

from ddns.engine import Engine
from ddns.locks import LocalLocks


ZONE_ROOT = 'example.com.'


def random_ascii(length):
    return "".join(
        random.choice(string.ascii_uppercase + string.digits) for _ in range(length)
    )


def client_error(code, message, operation_name):
    return botocore.exceptions.ClientError(
        error_response={
            'Error': {
                'Code': code,
                'Message': message,
                'Type': 'Sender'
            },
        },
        operation_name=operation_name,
    )


@pytest.fixture
def api_client(db):
    user = G(get_user_model())
    client = APIClient()
    client.force_authenticate(user=user)
    return client


class FakePaginator:
    def __init__(self, client, op_name):
        self._client = client
        self._op_name = op_name

    def paginate(self, **kwargs):
        """return a one element list, so we can pretent to paginate"""
        return [getattr(self._client, self._op_name)(**kwargs)]


class Moto:
    """"Mock boto"""

    def __init__(self):
        self._zones = {}
        self._zone_names = {}
        self._failures = set()
        self.changes = []

    def fail(self, action, name):
        """Make every `action` change on `name` fail until `recover` is called."""
        self._failures.add((action, name))

    def recover(self):
        self._failures = set()

    def get_paginator(self, op_name):
        return FakePaginator(self, op_name)

    @staticmethod
    def _zone_id(zone_id):
        if zone_id.startswith('/hostedzone/'):
            return zone_id[len('/hostedzone/'):]
        return zone_id

    def create_hosted_zone(self, Name, CallerReference, HostedZoneConfig=None):
        zone_id = 'Z{}'.format(random_ascii(12))
        self._zones[zone_id] = {}
        self._zone_names[zone_id] = Name
        for record in [
                {
                    'Name': Name,
                    'Type': 'NS',
                    'TTL': 1300,
                    'ResourceRecords': [
                        {'Value': 'test_ns1.example.net'},
                        {'Value': 'test_ns2.example.net'},
                    ]
                },
                {
                    'Name': Name,
                    'Type': 'SOA',
                    'TTL': 1300,
                    'ResourceRecords': [
                        {
                            'Value': ('ns1.example.net admin.example.net '
                                      '2013022001 86400 7200 604800 300'),
                        }
                    ]
                }]:
            self._add_record(zone_id, record)
        return {
            'HostedZone': {
                'Id': '/hostedzone/{}'.format(zone_id),
                'Name': Name,
            }
        }

    def list_hosted_zones_by_name(self, DNSName=None, MaxItems=None):
        zones = sorted(
            ({'Id': '/hostedzone/{}'.format(zone_id), 'Name': name}
             for zone_id, name in self._zone_names.items()),
            key=lambda zone: self._reverse_url_tokens(zone['Name']))
        if DNSName is not None:
            start = self._reverse_url_tokens(DNSName)
            zones = [zone for zone in zones
                     if self._reverse_url_tokens(zone['Name']) >= start]
        if MaxItems is not None:
            zones = zones[:int(MaxItems)]
        return {'HostedZones': zones}

    def _add_record(self, zone_id, record):
        key = self._record_key(record)
        self._zones[zone_id][key] = record

    def _remove_record(self, zone_id, record):
        key = self._record_key(record)
        self._zones[zone_id].pop(key)

    @staticmethod
    def _reverse_url_tokens(url):
        return ".".join(reversed(url.rstrip('.').split('.')))

    @staticmethod
    def _record_key(record):
        # turn a.example.com -> com.example.a
        return (Moto._reverse_url_tokens(record['Name']), record['Type'])

    def change_resource_record_sets(self, HostedZoneId, ChangeBatch):
        zone_id = self._zone_id(HostedZoneId)
        try:
            records = self._zones[zone_id]
        except KeyError:
            raise client_error('NoSuchHostedZone',
                               'No hosted zone found with id {}.'.format(HostedZoneId),
                               'change_resource_record_sets')

        for change in ChangeBatch['Changes']:
            action = change['Action']
            record_set = change['ResourceRecordSet']
            self.changes.append((action, record_set['Name'], record_set['Type']))
            if (action, record_set['Name']) in self._failures:
                raise client_error('ServiceUnavailable', 'Fake boto is having a bad day',
                                   'change_resource_record_sets')

            key = self._record_key(record_set)
            if action == 'DELETE':
                if records.get(key) != record_set:
                    raise client_error(
                        'InvalidChangeBatch',
                        "Tried to delete resource record set [name='{}', type='{}'] "
                        "but it was not found".format(record_set['Name'], record_set['Type']),
                        'change_resource_record_sets')
                self._remove_record(zone_id, record_set)
            elif action == 'UPSERT':
                self._add_record(zone_id, record_set)
            elif action == 'CREATE':
                if key in records:
                    raise client_error(
                        'InvalidChangeBatch',
                        "Tried to create resource record set [name='{}', type='{}'] "
                        "but it already exists".format(record_set['Name'], record_set['Type']),
                        'change_resource_record_sets')
                self._add_record(zone_id, record_set)
            else:
                raise AssertionError(action)

    def list_resource_record_sets(self, HostedZoneId=None, StartRecordName=None,
                                  StartRecordType=None, MaxItems=None):
        """
        Return record sets in order.

        See boto3 documenation:
        http://boto3.readthedocs.io/en/latest/reference/services/route53.html#Route53.Client.list_resource_record_sets
        """
        try:
            zone = self._zones[self._zone_id(HostedZoneId)]
        except KeyError:
            raise client_error('NoSuchHostedZone',
                               'No hosted zone found with id {}.'.format(HostedZoneId),
                               'list_resource_record_sets')
        items = sorted(zone.items())
        if StartRecordName is not None:
            start = (self._reverse_url_tokens(StartRecordName), StartRecordType or '')
            items = [(key, record) for key, record in items if key >= start]
        records = [record for key, record in items]
        if MaxItems is not None:
            records = records[:int(MaxItems)]
        return {'ResourceRecordSets': records}

    def address_records(self, zone_id):
        """Map of name -> (type, values) for every A/AAAA record in the zone."""
        return {
            record['Name']: (record['Type'],
                             [value['Value'] for value in record['ResourceRecords']])
            for record in self._zones[self._zone_id(zone_id)].values()
            if record['Type'] in ('A', 'AAAA')
        }

    def actions(self, action):
        return [(name, rtype) for (change_action, name, rtype) in self.changes
                if change_action == action]

    def cleanup(self):
        self._zones = {}
        self._zone_names = {}


@pytest.fixture
def boto_client(request):
    client = Moto()
    patcher = patch('ddns.route53.client._client', client)
    patcher.start()

    def cleanup():
        patcher.stop()
        client.cleanup()
    request.addfinalizer(cleanup)
    return client


@pytest.fixture
def zone_id(boto_client):
    zone = boto_client.create_hosted_zone(
        Name=ZONE_ROOT,
        CallerReference=random_ascii(8),
        HostedZoneConfig={
            'Comment': 'ddns-fixture-%s' % random_ascii(6)
        }
    )
    return zone['HostedZone']['Id']


@pytest.fixture
def engine(boto_client, zone_id):
    engine = Engine(
        domain=ZONE_ROOT,
        ttl=60,
        blacklist=['admin', 'mail'],
        expiration=timedelta(days=30),
        lock_manager=LocalLocks(wait=1),
    )
    with patch.object(apps.get_app_config('ddns'), 'engine', engine):
        yield engine
