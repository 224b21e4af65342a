from ddns.utils.validation import is_ipv6

ADDRESS_RECORD_TYPES = ['A', 'AAAA']


def record_type_for(ip):
    return 'AAAA' if is_ipv6(ip) else 'A'


def to_fqdn(name):
    name = name.lower()
    return name if name.endswith('.') else name + '.'


class Record:
    """A single Route 53 resource record set."""

    def __init__(self, name, type, ttl=None, values=None):
        self.name = to_fqdn(name)
        self.type = type
        self.ttl = ttl
        self.values = list(values or [])

    def __repr__(self):
        return "<{} {}:{} {}>".format(type(self).__name__, self.type, self.name, self.values)

    def __eq__(self, other):
        return isinstance(other, Record) and self.to_aws() == other.to_aws()

    @classmethod
    def from_aws_record(cls, record):
        return cls(
            name=record['Name'],
            type=record['Type'],
            ttl=record.get('TTL'),
            values=[value['Value'] for value in record.get('ResourceRecords', [])],
        )

    def to_aws(self):
        encoded_record = {
            'Name': self.name,
            'Type': self.type,
            'ResourceRecords': [{'Value': value} for value in self.values],
        }
        if self.ttl is not None:
            encoded_record['TTL'] = self.ttl
        return encoded_record

    def matches(self, name, type):
        return self.name == to_fqdn(name) and self.type == type

    @property
    def is_address(self):
        return self.type in ADDRESS_RECORD_TYPES
