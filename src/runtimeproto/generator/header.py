"""Header configuration and rendering for generated .proto documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_IMPORT = "protostuff-default.proto"


@dataclass(frozen=True)
class HeaderConfig:
    """Options written before the first ``message`` block.

    Attributes:
        package_name: Proto package (``package <name>;``)
        language_package: Target-language package (``option java_package``)
        outer_classname: Optional outer class name
            (``option java_outer_classname``)
        import_path: Shared definitions imported by every document
        language_option: Option name used for ``language_package``
        outer_option: Option name used for ``outer_classname``

    Examples:
        ```python
        config = HeaderConfig.for_namespace("com.example.model")
        config.package_name      # "com_example_model"
        config.language_package  # "com.example.model"
        ```
    """

    package_name: str
    language_package: str
    outer_classname: Optional[str] = None
    import_path: str = DEFAULT_IMPORT
    language_option: str = "java_package"
    outer_option: str = "java_outer_classname"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.package_name:
            raise ValueError("package_name must not be empty")

        if not self.language_package:
            raise ValueError("language_package must not be empty")

        if self.outer_classname is not None and not self.outer_classname:
            raise ValueError("outer_classname must not be empty when set")

    @classmethod
    def for_namespace(
        cls,
        namespace: str,
        *,
        package_name: Optional[str] = None,
        language_package: Optional[str] = None,
        outer_classname: Optional[str] = None,
    ) -> HeaderConfig:
        """Derive defaults from the module path the root type is declared in.

        The language package defaults to the module path and the proto package
        to the same path with dots replaced by underscores.
        """
        language_package = language_package or namespace
        return cls(
            package_name=package_name or language_package.replace(".", "_"),
            language_package=language_package,
            outer_classname=outer_classname,
        )


def render_header(config: HeaderConfig) -> str:
    """Render the header lines, ending with a blank line.

    Args:
        config: Header configuration

    Returns:
        Header text
    """
    lines = [
        f"package {config.package_name};",
        "",
        f'import "{config.import_path}";',
        "",
        f'option {config.language_option} = "{config.language_package}";',
    ]
    if config.outer_classname is not None:
        lines.append(f'option {config.outer_option} = "{config.outer_classname}";')
    lines.append("")
    lines.append("")
    return "\n".join(lines)
