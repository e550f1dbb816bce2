from typing import List, Optional

from pydantic import BaseModel, model_validator

from container_lib.components.lifecycle import Lifecycle


class ComponentSettings(BaseModel):
    """One `components:` entry of the container YAML file.

    `service` is always required. At most one of `implementation`, `instance`
    or `factory` may be given; with none of them the service class is
    registered as its own implementation.
    """

    service: str
    implementation: Optional[str] = None
    instance: Optional[str] = None
    factory: Optional[str] = None
    name: Optional[str] = None
    lifecycle: Lifecycle = Lifecycle.SINGLETON

    @model_validator(mode='after')
    def _single_provider(self):
        given = [k for k in ('implementation', 'instance', 'factory') if getattr(self, k)]
        if len(given) > 1:
            raise ValueError(f"Only one of implementation/instance/factory allowed, got {given}")
        return self


class ContainerSettings(BaseModel):
    log_level: Optional[str] = None
    engine: str = 'kernel'
    components: List[ComponentSettings] = []
