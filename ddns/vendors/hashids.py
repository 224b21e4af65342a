from hashids import Hashids
from django.conf import settings

HASHIDS_SALT = getattr(settings, 'SECRET_KEY', '')
HASHIDS_MIN_LENGTH = getattr(settings, 'HASHIDS_MIN_LENGTH', 7)
HASHIDS_ALPHABET = getattr(settings, 'HASHIDS_ALPHABET',
                           'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXY1234567890')

hashids = Hashids(salt=HASHIDS_SALT,
                  min_length=HASHIDS_MIN_LENGTH,
                  alphabet=HASHIDS_ALPHABET)


def encode_id(pk):
    return hashids.encode(pk)
