class TempObjectError(Exception):
    pass


class InvalidSourceError(TempObjectError):
    pass


class ClosedError(TempObjectError):
    pass


class AdapterError(TempObjectError):
    pass


class InputNotFoundError(TempObjectError, FileNotFoundError):
    pass
