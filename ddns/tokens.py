import uuid


def generate():
    """Return a new registration token. uuid4 draws from os.urandom."""
    return uuid.uuid4().hex
