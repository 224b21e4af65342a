class DDNSError(Exception):
    default_detail = 'Dynamic DNS error'

    def __init__(self, detail=None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidInput(DDNSError):
    default_detail = 'Invalid hostname'


class AlreadyRegistered(DDNSError):
    default_detail = 'Host already registered'


class UnknownToken(DDNSError):
    default_detail = 'Unknown token'


class InternalError(DDNSError):
    default_detail = 'Internal error'
