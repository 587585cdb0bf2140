# factory.py
from typing import Any, Callable, Dict, List, Optional
from adapters import TranslationDataPort

# Import adapter implementations
from adapters.tra_file import TraFileAdapter
from adapters.tra_format import is_tra_file_data

AdapterFactory = Callable[[Any], TranslationDataPort]

_ADAPTERS: Dict[str, AdapterFactory] = {
    TraFileAdapter.SOURCE_IDENTIFIER: TraFileAdapter,
}


def detect_adapter_type(data: Any) -> Optional[str]:
    if is_tra_file_data(data):
        return TraFileAdapter.SOURCE_IDENTIFIER
    return None


def create_adapter(data: Any, adapter_type: Optional[str] = None) -> TranslationDataPort:
    """
    Build an adapter over ``data``. The adapter type is detected from the
    shape of the data when not given explicitly.
    """
    adapter_type = adapter_type or detect_adapter_type(data)
    if not adapter_type:
        raise ValueError(
            "Unable to detect adapter type for the provided data. "
            "Please specify the adapter type explicitly."
        )
    try:
        factory = _ADAPTERS[adapter_type]
    except KeyError:
        raise ValueError(f"Unknown adapter '{adapter_type}'. Available: {list(_ADAPTERS)}")
    return factory(data)


def register_adapter(adapter_type: str, factory: AdapterFactory) -> None:
    _ADAPTERS[adapter_type] = factory


def unregister_adapter(adapter_type: str) -> None:
    _ADAPTERS.pop(adapter_type, None)


def has_adapter(adapter_type: str) -> bool:
    return adapter_type in _ADAPTERS


def registered_adapter_types() -> List[str]:
    return list(_ADAPTERS)
