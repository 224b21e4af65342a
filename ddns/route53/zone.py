from collections import OrderedDict
import logging

from botocore.exceptions import ClientError

from .client import get_client
from .record import Record, to_fqdn


logger = logging.getLogger(__name__)


class ZoneNotFound(Exception):
    pass


def _is_missing_record(excp):
    error = excp.response['Error']
    return error['Code'] == 'InvalidChangeBatch' and 'not found' in error['Message']


class Zone(object):
    """
    Handle on a Route 53 hosted zone. Every record operation is sent as its own
    change batch, so a failure only ever concerns a single record.
    """

    def __init__(self, root, id):
        self.root = to_fqdn(root)
        if id.startswith('/hostedzone/'):
            id = id[len('/hostedzone/'):]
        self.id = id
        self._client = get_client()

    def __repr__(self):
        return '<Zone {} ({})>'.format(self.root, self.id)

    def _change(self, action, record):
        change_batch = [{
            'Action': action,
            'ResourceRecordSet': record.to_aws(),
        }]
        try:
            self._client.change_resource_record_sets(
                HostedZoneId=self.id,
                ChangeBatch={'Changes': change_batch}
            )
        except ClientError as excp:
            if excp.response['Error']['Code'] == 'InvalidInput':
                logger.exception("failed to process batch %r", change_batch)
            raise

    def add_record(self, fqdn, record_type, ttl, values):
        self._change('CREATE', Record(fqdn, record_type, ttl, values))

    def change_record(self, fqdn, record_type, ttl, values):
        self._change('UPSERT', Record(fqdn, record_type, ttl, values))

    def get_record(self, fqdn, record_type):
        response = self._client.list_resource_record_sets(
            HostedZoneId=self.id,
            StartRecordName=to_fqdn(fqdn),
            StartRecordType=record_type,
            MaxItems='1',
        )
        for aws_record in response['ResourceRecordSets']:
            record = Record.from_aws_record(aws_record)
            if record.matches(fqdn, record_type):
                return record
        return None

    def delete_record(self, fqdn, record_type):
        """
        Delete the record set for ``fqdn``. Returns False if there was nothing
        to delete.
        """
        record = self.get_record(fqdn, record_type)
        if record is None:
            logger.info("%s %s is already absent", record_type, to_fqdn(fqdn))
            return False
        try:
            self._change('DELETE', record)
        except ClientError as excp:
            if not _is_missing_record(excp):
                raise
            logger.info("%s %s was deleted concurrently", record_type, record.name)
            return False
        return True

    def records(self):
        paginator = self._client.get_paginator('list_resource_record_sets')
        entries = OrderedDict()
        for page in paginator.paginate(HostedZoneId=self.id):
            for aws_record in page['ResourceRecordSets']:
                record = Record.from_aws_record(aws_record)
                entries[(record.name, record.type)] = record
        return entries


def get_zone(root, zone_id=None):
    if zone_id:
        return Zone(root, zone_id)
    root = to_fqdn(root)
    response = get_client().list_hosted_zones_by_name(DNSName=root, MaxItems='1')
    for hosted_zone in response['HostedZones']:
        if to_fqdn(hosted_zone['Name']) == root:
            return Zone(root, hosted_zone['Id'])
    raise ZoneNotFound(root)
