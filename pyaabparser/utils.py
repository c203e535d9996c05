import io
import os.path
from zipfile import ZipFile

import pyaabparser.constants as const

RADIX_MULTS = [0.00390625, 3.051758E-005, 1.192093E-007, 4.656613E-010]


def complexToFloat(xcomplex):
    return float(xcomplex & 0xFFFFFF00) * RADIX_MULTS[(xcomplex >> 4) & 3]


def get_zip_file(resource):
    """
    Open a zip archive from a path, raw bytes or a seekable binary stream.

    A stream stays owned by the caller: closing the returned ZipFile does
    not close it.
    """
    if isinstance(resource, (bytes, bytearray)):
        return ZipFile(io.BytesIO(resource))
    if hasattr(resource, "read") and hasattr(resource, "seek"):
        return ZipFile(resource)
    if isinstance(resource, (str, os.PathLike)):
        return ZipFile(resource)
    raise TypeError('Resource should be a path, bytes or a binary stream')


def read(filename, binary=True):
    """
    Open and read a file
    :param filename: filename to open and read
    :param binary: True if the file should be read as binary
    :return: bytes if binary is True, str otherwise
    """
    with open(filename, 'rb' if binary else 'r') as f:
        return f.read()


def format_reference(ref):
    prefix = "?" if ref.type == const.REFERENCE_TYPE_ATTRIBUTE else "@"
    if ref.name:
        return "{}{}".format(prefix, ref.name)
    return "{}{:08X}".format(prefix, ref.id)


def format_primitive(prim):
    kind = prim.WhichOneof("oneof_value")
    if kind is None:
        return ""

    data = getattr(prim, kind)
    if kind == "boolean_value":
        return "true" if data else "false"
    elif kind == "float_value":
        return "%f" % data
    elif kind == "int_hexadecimal_value":
        return "0x%08X" % data
    elif kind.startswith("color_"):
        return "#%08X" % data
    elif kind == "dimension_value":
        return "%f%s" % (
            complexToFloat(data),
            const.DIMENSION_UNITS[data & const.COMPLEX_UNIT_MASK]
        )
    elif kind == "fraction_value":
        return "%f%s" % (
            complexToFloat(data) * 100,
            const.FRACTION_UNITS[data & const.COMPLEX_UNIT_MASK]
        )
    return "%d" % data


def format_item(item):
    """
    Return a printable representation of a compiled attribute value.

    :param item: a :class:`pyaabparser.protos.Item`
    :rtype: str
    """
    kind = item.WhichOneof("value")
    if kind == "ref":
        return format_reference(item.ref)
    elif kind == "str":
        return item.str.value
    elif kind == "raw_str":
        return item.raw_str.value
    elif kind == "file":
        return item.file.path
    elif kind == "prim":
        return format_primitive(item.prim)
    elif kind == "id":
        return ""
    return "<unknown item>"
