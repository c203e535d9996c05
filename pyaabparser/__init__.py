# flake8: noqa

from .core import AAB, Error, FileNotPresent, BrokenAABError, IconNotFound
from .exceptions import ResParserError, InvalidManifestError, InvalidResourceTableError, ImageDecodeError
from .imaging import ImageDecoder
from .manifest import Manifest, Application, ResourceReference, ManifestExtractor
from .restable import ResourceTable, make_config
from .xmlprinter import XMLPrinter

__all__ = (
    "__title__",
    "__package_name__",
    "__description__",
    "__version__",
    "__author__",
    "__author_email__",
    "__license__",
    "AAB",
    "Error",
    "FileNotPresent",
    "BrokenAABError",
    "IconNotFound",
    "ResParserError",
    "InvalidManifestError",
    "InvalidResourceTableError",
    "ImageDecodeError",
    "ImageDecoder",
    "Manifest",
    "Application",
    "ResourceReference",
    "ManifestExtractor",
    "ResourceTable",
    "make_config",
    "XMLPrinter",
)

__title__ = "Pyaabparser"
__package_name__ = "pyaabparser"
__description__ = (
    "Parser for Android App Bundles to get package, version, label and icon without bundletool."
)
__version__ = "0.1.0"
__author__ = "Subho Halder"
__author_email__ = "sunny@appknox.com"
__license__ = "Apache License 2.0"
