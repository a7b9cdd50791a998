from .parser_config_model import ParserConfig, default_config_path

__all__ = [
    "ParserConfig",
    "default_config_path"
]
