"""
Registration engine: keeps Host rows and the Route 53 zone in agreement.

Every mutation of a host runs under a per-hostname lock. Remote and store calls
go through ``Engine._attempt`` which turns their result into an ``Outcome``;
the call site decides whether a failure is a warning (logged, ignored) or fatal
(compensated, then reported as ``InternalError``).
"""
from collections import namedtuple
from datetime import timedelta
import contextlib
import enum
import logging

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from ddns import locks, route53, tokens
from ddns.exceptions import AlreadyRegistered, InternalError, InvalidInput, UnknownToken
from ddns.models import Host
from ddns.route53 import record_type_for
from ddns.utils.validation import normalize_ip
from ddns.validators import is_blacklisted, parse_subzones, validate_main, validate_sub


logger = logging.getLogger(__name__)

NewRegistration = namedtuple('NewRegistration', ['mainzone', 'subzones', 'ip'])
RenewRegistration = namedtuple('RenewRegistration', ['token', 'mainzone', 'subzones', 'ip'])

FAILURES = (ClientError, BotoCoreError, route53.ZoneNotFound, DatabaseError)


class Outcome(enum.Enum):
    OK = 'ok'
    WARNING = 'warning'
    FATAL = 'fatal'


def _short(token):
    return '{}...'.format(token[:6]) if token else '-'


class Engine:

    def __init__(self, domain, zone_id=None, ttl=60, blacklist=(),
                 expiration=timedelta(days=30), lock_manager=None,
                 get_zone=route53.get_zone, generate_token=tokens.generate):
        self.domain = route53.record.to_fqdn(domain)
        self.zone_id = zone_id
        self.ttl = ttl
        self.blacklist = frozenset(blacklist)
        self.expiration = expiration
        self.locks = lock_manager or locks.LocalLocks()
        self._get_zone = get_zone
        self._generate_token = generate_token

    @classmethod
    def from_settings(cls):
        return cls(
            domain=settings.DDNS_DOMAIN,
            zone_id=getattr(settings, 'DDNS_HOSTED_ZONE_ID', None),
            ttl=settings.DDNS_RECORD_TTL,
            blacklist=settings.DDNS_BLACKLIST,
            expiration=timedelta(days=settings.DDNS_EXPIRATION_DAYS),
            lock_manager=locks.from_settings(),
        )

    def fqdn(self, hostname, sub=None):
        name = '{}.{}'.format(hostname, self.domain)
        if sub is None:
            return name
        return '{}.{}'.format(sub, name)

    def names(self, host):
        return [self.fqdn(host.hostname)] + [self.fqdn(host.hostname, sub)
                                             for sub in host.subzones]

    # public operations

    def submit(self, request):
        """Run a tagged registration request. Returns the host's token."""
        if isinstance(request, RenewRegistration):
            self._renew(request)
            return request.token
        if isinstance(request, NewRegistration):
            return self._register(request)
        raise TypeError('Unknown registration request {!r}'.format(request))

    def register(self, mainzone, subzones='', token='', ip=None):
        if token:
            return self.submit(RenewRegistration(token, mainzone, subzones, ip))
        return self.submit(NewRegistration(mainzone, subzones, ip))

    def update(self, mainzone, subzones, token, ip):
        self.submit(RenewRegistration(token, mainzone, subzones, ip))

    def refresh(self, token, ip):
        """Point every record of the host owning ``token`` at ``ip``."""
        ip = self._clean_ip(ip)
        logger.info("Updating IP for token %s: %s", _short(token), ip)
        with self._locked_host(token) as host:
            zone = self._zone()
            self._apply_update(zone, host, host.subzones, ip)

    def delete(self, token):
        logger.info("Deleting host for token %s", _short(token))
        with self._locked_host(token) as host:
            self._delete_host(host)

    def delete_host(self, host):
        with self._host_lock(host.hostname):
            host = self._reload(host)
            if host is not None:
                self._delete_host(host)

    def remove_expired(self, now=None):
        """Delete every host not refreshed within the retention window."""
        logger.info("Removing expired dns entries...")
        cutoff = (now or timezone.now()) - self.expiration
        try:
            hosts = list(Host.objects.all())
        except DatabaseError:
            logger.exception("Unable to query all hosts from DB")
            raise InternalError()

        removed = []
        for host in hosts:
            if not host.is_expired(cutoff):
                continue
            logger.info("Entry %s has expired", host.hostname)
            try:
                if self._expire(host, cutoff):
                    removed.append(host.hostname)
            except Exception:
                logger.exception("Failed to remove expired host %s", host.hostname)
        return removed

    def reconcile_host(self, host):
        """Re-push every record of ``host`` to the zone."""
        with self._host_lock(host.hostname):
            host = self._reload(host)
            if host is None:
                return
            zone = self._zone()
            record_type = record_type_for(host.ip)
            failed = [
                name for name in self.names(host)
                if self._attempt(Outcome.FATAL, 'upsert {}'.format(name), zone.change_record,
                                 name, record_type, self.ttl, [host.ip]) is not Outcome.OK
            ]
            if failed:
                raise InternalError()

    def reconcile_all(self):
        for host in Host.objects.all():
            try:
                self.reconcile_host(host)
            except Exception:
                logger.exception("Error while reconciling %s", host.hostname)

    def delete_orphaned_records(self, dry_run=False):
        zone = self._zone()
        orphans = self.orphaned_records(zone)
        if not dry_run:
            for record in orphans:
                logger.info("Deleting orphaned record %s %s", record.type, record.name)
                self._attempt(Outcome.WARNING, 'delete {}'.format(record.name),
                              zone.delete_record, record.name, record.type)
        return orphans

    def orphaned_records(self, zone):
        """
        Address records under the domain that no host accounts for.

        Only records shaped like the ones the engine writes (a single value at
        the engine's ttl, on a host or subzone name) are considered. Names that
        are blacklisted are never touched, so operators keep their own records
        by listing them in ``DDNS_BLACKLIST``.
        """
        wanted = set()
        for host in Host.objects.all():
            record_type = record_type_for(host.ip)
            wanted.update((name, record_type) for name in self.names(host))

        orphans = []
        for (name, record_type), record in zone.records().items():
            if not record.is_address or (name, record_type) in wanted:
                continue
            if record.ttl != self.ttl or len(record.values) != 1:
                continue
            labels = self._labels(name)
            if labels is None or is_blacklisted(labels[-1], self.blacklist):
                continue
            orphans.append(record)
        return orphans

    # flows

    def _register(self, request):
        hostname = self._clean_mainzone(request.mainzone)
        subzones = self._clean_subzones(request.subzones)
        ip = self._clean_ip(request.ip)
        logger.info("Register new DNS: %s %s %s", hostname, ','.join(subzones), ip)

        with self._host_lock(hostname):
            if self._find_host(hostname=hostname) is not None:
                logger.info("Host %s already exists in DB", hostname)
                raise AlreadyRegistered()

            zone = self._zone()
            host = Host(hostname=hostname, subzones=subzones, ip=ip,
                        token=self._generate_token(), updated_at=timezone.now())
            logger.info("Adding new host %s to DB with token %s", hostname, _short(host.token))
            try:
                with transaction.atomic():
                    host.save(force_insert=True)
            except IntegrityError:
                logger.info("Host %s was registered concurrently", hostname)
                raise AlreadyRegistered()
            except DatabaseError:
                logger.exception("Failed to add entry %s to DB", hostname)
                raise InternalError()

            record_type = record_type_for(ip)
            added = []
            for name in self.names(host):
                outcome = self._attempt(Outcome.FATAL, 'add {}'.format(name), zone.add_record,
                                        name, record_type, self.ttl, [ip])
                if outcome is not Outcome.OK:
                    self._rollback(zone, host, added)
                    raise InternalError()
                added.append((name, record_type))
            return host.token

    def _renew(self, request):
        subzones = self._clean_subzones(request.subzones)
        ip = self._clean_ip(request.ip)
        mainzone = self._clean_mainzone(request.mainzone) if request.mainzone else None
        logger.info("Update DNS for token %s: %s %s %s",
                    _short(request.token), mainzone, ','.join(subzones), ip)

        with self._locked_host(request.token) as host:
            if mainzone is not None and mainzone != host.hostname:
                logger.info("Token %s does not belong to %s", _short(request.token), mainzone)
                raise InvalidInput('Hostname does not match token')
            zone = self._zone()
            self._apply_update(zone, host, subzones, ip)

    def _apply_update(self, zone, host, subzones, ip):
        old_ip = host.ip
        readded = set()

        if set(subzones) != set(host.subzones):
            old_type = record_type_for(old_ip)
            for sub in host.subzones:
                name = self.fqdn(host.hostname, sub)
                self._attempt(Outcome.WARNING, 'delete {}'.format(name), zone.delete_record,
                              name, old_type)

            record_type = record_type_for(ip)
            added = []
            for sub in subzones:
                name = self.fqdn(host.hostname, sub)
                outcome = self._attempt(Outcome.FATAL, 'add {}'.format(name), zone.add_record,
                                        name, record_type, self.ttl, [ip])
                if outcome is not Outcome.OK:
                    self._rollback(zone, host, added + [(self.fqdn(host.hostname), old_type)])
                    raise InternalError()
                added.append((name, record_type))

            host.subzones = subzones
            readded = set(subzones)

        repointed = True
        if ip != old_ip:
            names = [self.fqdn(host.hostname)] + [self.fqdn(host.hostname, sub)
                                                  for sub in host.subzones if sub not in readded]
            for name in names:
                if self._repoint(zone, name, old_ip, ip) is not Outcome.OK:
                    repointed = False
            if repointed:
                host.ip = ip

        host.updated_at = timezone.now()
        outcome = self._attempt(Outcome.FATAL, 'save {}'.format(host.hostname), host.save)
        if outcome is not Outcome.OK or not repointed:
            raise InternalError()

    def _repoint(self, zone, name, old_ip, new_ip):
        old_type, new_type = record_type_for(old_ip), record_type_for(new_ip)
        if old_type != new_type:
            self._attempt(Outcome.WARNING, 'delete {}'.format(name), zone.delete_record,
                          name, old_type)
        logger.info("Updating record %s -> %s", name, new_ip)
        return self._attempt(Outcome.FATAL, 'change {}'.format(name), zone.change_record,
                             name, new_type, self.ttl, [new_ip])

    def _rollback(self, zone, host, added):
        logger.warning("Rolling back registration of %s", host.hostname)
        for name, record_type in reversed(added):
            self._attempt(Outcome.WARNING, 'delete {}'.format(name), zone.delete_record,
                          name, record_type)
        self._attempt(Outcome.FATAL, 'delete host row {}'.format(host.hostname), host.delete)

    def _delete_host(self, host):
        try:
            zone = self._zone()
        except InternalError:
            zone = None

        if zone is not None:
            record_type = record_type_for(host.ip)
            for name in reversed(self.names(host)):
                logger.info("Deleting record %s", name)
                self._attempt(Outcome.WARNING, 'delete {}'.format(name), zone.delete_record,
                              name, record_type)

        outcome = self._attempt(Outcome.FATAL, 'delete host row {}'.format(host.hostname),
                                host.delete)
        if outcome is not Outcome.OK:
            raise InternalError()

    def _expire(self, host, cutoff):
        with self._host_lock(host.hostname):
            host = self._reload(host)
            if host is None or not host.is_expired(cutoff):
                return False
            self._delete_host(host)
            return True

    # helpers

    def _attempt(self, severity, description, func, *args, **kwargs):
        try:
            func(*args, **kwargs)
        except FAILURES as excp:
            if severity is Outcome.WARNING:
                logger.warning("Unable to %s: %s", description, excp)
            else:
                logger.exception("Unable to %s", description)
            return severity
        return Outcome.OK

    def _zone(self):
        try:
            return self._get_zone(self.domain, zone_id=self.zone_id)
        except FAILURES:
            logger.exception("Unable to get zone %s from Route 53", self.domain)
            raise InternalError()

    def _find_host(self, **fields):
        try:
            return Host.objects.get(**fields)
        except Host.DoesNotExist:
            return None
        except DatabaseError:
            logger.exception("Unable to query host %s", fields.get('hostname', ''))
            raise InternalError()

    def _reload(self, host):
        return self._find_host(pk=host.pk)

    @contextlib.contextmanager
    def _host_lock(self, hostname):
        try:
            held = self.locks.acquire('host:{}'.format(hostname))
        except locks.LockUnavailable:
            logger.error("Unable to lock host %s", hostname)
            raise InternalError()
        try:
            yield
        finally:
            held.release()

    @contextlib.contextmanager
    def _locked_host(self, token):
        host = self._find_host(token=token) if token else None
        if host is None:
            logger.info("Token %s has not been found", _short(token))
            raise UnknownToken()
        with self._host_lock(host.hostname):
            host = self._find_host(token=token)
            if host is None:
                raise UnknownToken()
            yield host

    def _clean_mainzone(self, mainzone):
        if not mainzone:
            raise InvalidInput('Mainzone is empty')
        if not validate_main(mainzone):
            logger.info("Invalid hostname: %s", mainzone)
            raise InvalidInput()
        if is_blacklisted(mainzone, self.blacklist):
            logger.info("Invalid hostname, is in blacklist: %s", mainzone)
            raise InvalidInput()
        return mainzone

    def _clean_subzones(self, subzones):
        subzones = parse_subzones(subzones)
        for sub in subzones:
            if not validate_sub(sub):
                logger.info("Invalid sub hostname: %s", sub)
                raise InvalidInput()
        return subzones

    def _clean_ip(self, ip):
        normalized = normalize_ip(ip) if ip else None
        if normalized is None:
            raise InvalidInput('Invalid IP address')
        return normalized

    def _labels(self, name):
        if not name.endswith('.' + self.domain):
            return None
        labels = name[:-len(self.domain) - 1].split('.')
        if len(labels) == 1 and validate_main(labels[0]):
            return labels
        if len(labels) == 2 and validate_sub(labels[0]) and validate_main(labels[1]):
            return labels
        return None
