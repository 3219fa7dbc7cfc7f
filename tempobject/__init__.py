# detect if we are imported from the setup procedure (borrowed from numpy code)
try:
    __TEMPOBJECT_SETUP__
except NameError:
    __TEMPOBJECT_SETUP__ = False

if not __TEMPOBJECT_SETUP__:
    from .config import config_context, get_config, reset_config, set_config
    from .exceptions import (
        ClosedError,
        InvalidSourceError,
        TempObjectError,
    )
    from .temp_object import TempFileHandle, TempObject

__version__ = "0.1.0"
