class ResParserError(Exception):
    """Exception raised when parsing compiled Android resources fails."""
    pass


class InvalidManifestError(ResParserError):
    """Exception raised when the compiled AndroidManifest.xml can not be decoded."""
    pass


class InvalidResourceTableError(ResParserError):
    """Exception raised when resources.pb can not be decoded."""
    pass


class ImageDecodeError(ResParserError):
    """Exception raised when an icon file is not a supported raster image."""
    pass
