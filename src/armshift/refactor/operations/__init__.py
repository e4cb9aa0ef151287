from .base import AbstractOperation
from .lro_calls import LroCallOperation
from .nest_properties import NestPropertiesOperation

__all__ = ["AbstractOperation", "LroCallOperation", "NestPropertiesOperation"]
