from pushwire.container import Container
from pushwire.exceptions import (
    PushwireBindingNotBoundError,
    PushwireConfigurationError,
    PushwireConstructionError,
    PushwireError,
    PushwireInvalidConstructorError,
    PushwireInvalidKeyError,
    PushwireInvalidOracleError,
    PushwireResolutionError,
)
from pushwire.lock_mode import LockMode
from pushwire.markers import Push, constructor
from pushwire.oracle import (
    ConstructorSpec,
    InjectedMember,
    MarkSite,
    MetadataOracle,
    ParameterSpec,
    Visibility,
)
from pushwire.reflection import AnnotationOracle
from pushwire.schema import SchemaOracle, TypeSchema

__all__ = [
    "AnnotationOracle",
    "ConstructorSpec",
    "Container",
    "InjectedMember",
    "LockMode",
    "MarkSite",
    "MetadataOracle",
    "ParameterSpec",
    "Push",
    "PushwireBindingNotBoundError",
    "PushwireConfigurationError",
    "PushwireConstructionError",
    "PushwireError",
    "PushwireInvalidConstructorError",
    "PushwireInvalidKeyError",
    "PushwireInvalidOracleError",
    "PushwireResolutionError",
    "SchemaOracle",
    "TypeSchema",
    "Visibility",
    "constructor",
]
