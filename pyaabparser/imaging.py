import io
import logging

from PIL import Image, UnidentifiedImageError

from pyaabparser.exceptions import ImageDecodeError

log = logging.getLogger("pyaabparser.imaging")

# Pillow format identifiers, tried in this order
DEFAULT_FORMATS = ("PNG", "JPEG", "WEBP")


class ImageDecoder(object):
    """
    Decodes icon files into :class:`PIL.Image.Image` objects.

    Only the formats given to the constructor are tried, in their order,
    so the accepted set does not depend on which Pillow plugins happen to
    be loaded.
    """

    def __init__(self, formats=DEFAULT_FORMATS):
        if not formats:
            raise ValueError("At least one image format is required")
        self.formats = tuple(f.upper() for f in formats)

        # load every plugin so Image.OPEN lists all formats Pillow can read
        Image.init()
        for name in self.formats:
            if name not in Image.OPEN:
                raise ValueError("Unknown image format '{}'".format(name))

    def decode(self, data):
        """
        :param data: raw bytes of the image file
        :rtype: :class:`PIL.Image.Image`
        """
        try:
            image = Image.open(io.BytesIO(data), formats=self.formats)
            # read the pixels now, the buffer is gone after this call
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageDecodeError(
                "Can not decode image as one of {}: {}".format(", ".join(self.formats), e)) from e

        log.debug("Decoded {} image of size {}".format(image.format, image.size))
        return image
