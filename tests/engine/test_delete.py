# pylint: disable=no-member,unused-argument,protected-access,redefined-outer-name
import pytest
from django.db import DatabaseError
from mock import patch

from ddns.exceptions import InternalError, UnknownToken
from ddns.models import Host
from tests.fixtures import boto_client, engine, zone_id  # noqa: F401
from tests.utils import fqdn, register


@pytest.mark.django_db
def test_delete_by_token(engine, boto_client, zone_id):
    host = register(engine, 'myhouse', 'cam,nas')
    other = register(engine, 'yourhouse')

    engine.delete(host.token)

    assert list(Host.objects.all()) == [other]
    assert boto_client.actions('DELETE') == [
        (fqdn('nas.myhouse'), 'A'),
        (fqdn('cam.myhouse'), 'A'),
        (fqdn('myhouse'), 'A'),
    ]
    assert boto_client.address_records(zone_id) == {fqdn('yourhouse'): ('A', ['1.1.1.1'])}


@pytest.mark.django_db
def test_delete_twice(engine):
    host = register(engine, 'myhouse')
    engine.delete(host.token)

    with pytest.raises(UnknownToken):
        engine.delete(host.token)


@pytest.mark.django_db
def test_delete_unknown_token(engine, boto_client):
    register(engine, 'myhouse')
    changes = list(boto_client.changes)

    with pytest.raises(UnknownToken):
        engine.delete('not-a-token')
    with pytest.raises(UnknownToken):
        engine.delete('')

    assert boto_client.changes == changes
    assert Host.objects.count() == 1


@pytest.mark.django_db
def test_delete_with_remote_failures_still_removes_row(engine, boto_client, zone_id):
    host = register(engine, 'myhouse', 'cam')
    boto_client.fail('DELETE', fqdn('cam.myhouse'))
    boto_client.fail('DELETE', fqdn('myhouse'))

    engine.delete(host.token)

    assert Host.objects.count() == 0
    assert set(boto_client.address_records(zone_id)) == {fqdn('myhouse'), fqdn('cam.myhouse')}


@pytest.mark.django_db
def test_delete_with_already_absent_records(engine, boto_client, zone_id):
    host = register(engine, 'myhouse', 'cam')
    for name in (fqdn('myhouse'), fqdn('cam.myhouse')):
        boto_client.change_resource_record_sets(
            HostedZoneId=zone_id,
            ChangeBatch={'Changes': [{
                'Action': 'DELETE',
                'ResourceRecordSet': {
                    'Name': name, 'Type': 'A', 'TTL': 60,
                    'ResourceRecords': [{'Value': '1.1.1.1'}],
                },
            }]})

    engine.delete(host.token)

    assert Host.objects.count() == 0


@pytest.mark.django_db
def test_delete_when_zone_is_unreachable(engine, boto_client):
    host = register(engine, 'myhouse')
    engine.domain = 'example.org.'

    engine.delete(host.token)

    assert Host.objects.count() == 0


@pytest.mark.django_db
def test_delete_store_failure(engine, boto_client):
    host = register(engine, 'myhouse')

    with patch.object(Host, 'delete', side_effect=DatabaseError('db is gone')):
        with pytest.raises(InternalError):
            engine.delete(host.token)


@pytest.mark.django_db
def test_delete_host_that_is_already_gone(engine, boto_client):
    host = register(engine, 'myhouse')
    Host.objects.filter(pk=host.pk).delete()

    engine.delete_host(host)

    assert boto_client.actions('DELETE') == []
