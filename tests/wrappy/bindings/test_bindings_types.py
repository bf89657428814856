from wrappy.bindings.types import (
    BindingsConfig,
    BindingType,
    ConfigBinding,
    DataBinding,
    ExecutableBinding,
)


def test_empty_by_default():
    config = BindingsConfig()
    assert config.isEmpty()
    assert config.executables == [] and config.configs == [] and config.data == []


def test_add_helpers():
    config = BindingsConfig()
    config.addExecutable(ExecutableBinding(source="content/bin/app", target="~/.local/bin/app"))
    config.addConfig(ConfigBinding(source="config/app.toml", target="~/.config/app.toml", backupExisting=True))
    config.addData(DataBinding(source="content/data", target="~/.local/share/app"))

    assert not config.isEmpty()
    assert config.configs[0].backupExisting is True
    assert config.executables[0].bindingType is BindingType.WRAPPER


def test_parses_snake_case_document():
    config = BindingsConfig.model_validate(
        {
            "executables": [
                {
                    "source": "content/bin/app",
                    "target": "app",
                    "binding_type": "symlink",
                    "display_name": "App",
                }
            ],
            "configs": [{"source": "a", "target": "b", "backup_existing": True, "extra": 1}],
        }
    )
    exe = config.executables[0]
    assert exe.bindingType is BindingType.SYMLINK
    assert exe.displayName == "App"
    assert config.configs[0].backupExisting is True


def test_dumps_snake_case_aliases():
    binding = DataBinding(source="content/data", target="/srv/data", bindingType=BindingType.COPY)
    dumped = binding.model_dump(mode="json", by_alias=True)
    assert dumped == {
        "source": "content/data",
        "target": "/srv/data",
        "binding_type": "copy",
        "backup_existing": False,
    }
