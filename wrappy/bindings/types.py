# wrappy/bindings/types.py
from __future__ import annotations
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BindingType",
    "ExecutableBinding",
    "ConfigBinding",
    "DataBinding",
    "BindingsConfig",
]



class BindingType(Enum):
    SYMLINK = "symlink"
    # Wrapper script that intercepts execution
    WRAPPER = "wrapper"
    COPY = "copy"



class _BindingBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Path inside the container, relative to its root
    source: str
    # Host path, "~" is expanded by the installer
    target: str
    bindingType: BindingType = Field(default=BindingType.WRAPPER, alias="binding_type")



class ExecutableBinding(_BindingBase):
    displayName: str | None = Field(default=None, alias="display_name")



class ConfigBinding(_BindingBase):
    backupExisting: bool = Field(default=False, alias="backup_existing")



class DataBinding(_BindingBase):
    backupExisting: bool = Field(default=False, alias="backup_existing")



class BindingsConfig(BaseModel):
    """
    Host bindings declared by a manifest.

    The validation core only carries this block; creating symlinks, copies or
    wrapper scripts is the job of the binding installer.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    executables: list[ExecutableBinding] = Field(default_factory=list)
    configs: list[ConfigBinding] = Field(default_factory=list)
    data: list[DataBinding] = Field(default_factory=list)

    def addExecutable(self, binding: ExecutableBinding) -> None:
        self.executables.append(binding)

    def addConfig(self, binding: ConfigBinding) -> None:
        self.configs.append(binding)

    def addData(self, binding: DataBinding) -> None:
        self.data.append(binding)

    def isEmpty(self) -> bool:
        return not (self.executables or self.configs or self.data)
