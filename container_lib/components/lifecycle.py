from enum import Enum


class Lifecycle(str, Enum):
    """Instance reuse policy for a registration.

    SINGLETON entries are constructed at most once and the cached instance is
    returned on every later resolution. TRANSIENT entries are constructed on
    every resolution.
    """

    SINGLETON = "singleton"
    TRANSIENT = "transient"
