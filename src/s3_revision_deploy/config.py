import dataclasses
import io
import os
import typing
import ZConfig


SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schema.xml")


def _load_schema():
    return ZConfig.loadSchema(SCHEMA_PATH)


def load_config(path):
    """Load a deploy configuration file."""
    config, _handler = ZConfig.loadConfig(_load_schema(), path)
    return config


def load_config_string(text):
    config, _handler = ZConfig.loadConfigFile(_load_schema(), io.StringIO(text))
    return config


@dataclasses.dataclass(frozen=True)
class DeployOptions:
    """Per-call settings shared by upload and activation."""

    bucket: str
    acl: str = "public-read"
    cache_control: str = "max-age=0, no-cache"
    allow_overwrite: bool = False
    gzipped_file_paths: typing.Tuple[str, ...] = ()
    server_side_encryption: typing.Optional[str] = None
    default_content_type: str = "text/html"
    page_size: typing.Optional[int] = None

    @classmethod
    def from_config(cls, config, **overrides):
        options = cls(
            bucket=config.bucket,
            acl=config.acl,
            cache_control=config.cache_control,
            allow_overwrite=config.allow_overwrite,
            gzipped_file_paths=tuple(config.gzipped_file_paths or ()),
            server_side_encryption=config.server_side_encryption,
            default_content_type=config.default_content_type,
            page_size=config.page_size,
        )
        return dataclasses.replace(options, **overrides) if overrides else options

    def is_gzipped(self, file_pattern):
        return file_pattern in self.gzipped_file_paths
