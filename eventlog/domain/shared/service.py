from dataclasses import dataclass
from typing import Any, dataclass_transform


@dataclass_transform()
class Service:
    """Base class for domain services.

    Subclasses become dataclasses, so their collaborators are declared as
    annotated fields and passed positionally by the DI providers.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        dataclass(cls)
