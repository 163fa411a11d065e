from .registry import DEFAULT_REGISTRY, AdapterRegistration, active_registrations
from .source_manager import AggregationResult, VersionAggregator

__all__ = [
    'DEFAULT_REGISTRY',
    'AdapterRegistration',
    'active_registrations',
    'AggregationResult',
    'VersionAggregator',
]
