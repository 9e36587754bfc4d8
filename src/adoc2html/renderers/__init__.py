#  Copyright (c) 2025 Tom Villani, Ph.D.
"""HTML converters for the AsciiDoc node tree.

Backends
--------
franklin : FranklinConverter
    Franklin block convention (default)
html5, html : Html5Converter
    Generic HTML5 markup

"""

from __future__ import annotations

from adoc2html.constants import DEFAULT_BACKEND
from adoc2html.exceptions import FormatError
from adoc2html.renderers.base import BaseConverter, RenderContext
from adoc2html.renderers.franklin import FranklinConverter
from adoc2html.renderers.html5 import Html5Converter

CONVERTERS: dict[str, type[BaseConverter]] = {
    "franklin": FranklinConverter,
    "html5": Html5Converter,
    "html": Html5Converter,
}


def create_converter(backend: str = DEFAULT_BACKEND) -> BaseConverter:
    """Create a fresh converter for ``backend``.

    Parameters
    ----------
    backend : str, default "franklin"
        Backend name

    Returns
    -------
    BaseConverter
        A new converter instance

    Raises
    ------
    FormatError
        If the backend is unknown

    """
    try:
        converter_class = CONVERTERS[backend]
    except KeyError:
        raise FormatError(format_type=backend, supported_formats=sorted(CONVERTERS)) from None
    return converter_class()


__all__ = [
    "BaseConverter",
    "CONVERTERS",
    "FranklinConverter",
    "Html5Converter",
    "RenderContext",
    "create_converter",
]
