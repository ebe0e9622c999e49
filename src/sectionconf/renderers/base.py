#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sectionconf/renderers/base.py
"""Base classes for configuration renderers.

This module defines the abstract base class shared by the text and binary
renderers: option validation plus writing finished output to paths and
streams.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import IO, Union

from sectionconf.constants import DEFAULT_ENCODING
from sectionconf.exceptions import InvalidOptionsError, OutputWriteError, ValidationError
from sectionconf.model import Configuration
from sectionconf.options.base import BaseRendererOptions
from sectionconf.utils.io_utils import write_content

RendererOutput = Union[str, Path, IO[bytes], IO[str]]


class BaseRenderer(ABC):
    """Abstract base class for configuration renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, config: Configuration, output: RendererOutput) -> None:
        """Render the configuration to a path or file-like object.

        Raises
        ------
        RenderingError
            If the configuration cannot be rendered
        OutputWriteError
            If a path cannot be written

        """
        pass

    def render_to_string(self, config: Configuration) -> str:
        """Render the configuration to a string (text renderers only).

        Raises
        ------
        NotImplementedError
            If the renderer does not support string output

        """
        raise NotImplementedError(f"{self.__class__.__name__} does not support rendering to a string.")

    def render_to_bytes(self, config: Configuration) -> bytes:
        """Render the configuration to bytes.

        The default implementation renders into a BytesIO buffer.
        """
        buffer = BytesIO()
        self.render(config, buffer)
        return buffer.getvalue()

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def _validate_configuration(config: object) -> Configuration:
        if not isinstance(config, Configuration):
            raise ValidationError(
                f"Expected a Configuration, got {type(config).__name__}",
                parameter_name="config",
                parameter_value=config,
            )
        return config

    @staticmethod
    def write_output(content: Union[str, bytes], output: RendererOutput, encoding: str = DEFAULT_ENCODING) -> None:
        """Write rendered content to a path or stream.

        Paths are opened and closed here, including when writing fails.

        Raises
        ------
        OutputWriteError
            If a path cannot be written
        ValidationError
            If the output type is not supported

        """
        try:
            write_content(content, output, encoding=encoding)
        except OSError as e:
            raise OutputWriteError(str(output), original_error=e) from e
        except TypeError as e:
            raise ValidationError(str(e), parameter_name="output", parameter_value=output, original_error=e) from e
