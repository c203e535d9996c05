import logging
import re

import pyaabparser.constants as const

log = logging.getLogger("pyaabparser.manifest")

# int() also accepts spaces and underscores
DECIMAL_RE = re.compile(r"^[+-]?[0-9]+\Z")


class ResourceReference(object):
    """
    A reference to a resource by type and name, e.g. ``mipmap/ic_launcher``.

    Use :meth:`parse` to build one from the string stored in the manifest.
    """

    def __init__(self, type_name, name, package=""):
        self.type = type_name
        self.name = name
        self.package = package

    @classmethod
    def parse(cls, value):
        """
        Split a ``"<type>/<name>"`` reference.

        A type qualified with its package (``com.example:mipmap``) is
        accepted and the package kept aside.

        :param value: the reference string
        :return: a :class:`ResourceReference`, or None if the string does not
            consist of exactly two ``/`` separated parts
        """
        if not value:
            return None

        parts = value.split("/")
        if len(parts) != 2:
            log.warning("Invalid resource reference '{}'".format(value))
            return None

        type_name, name = parts
        package = ""
        if ":" in type_name:
            package, type_name = type_name.split(":", 1)
        return cls(type_name, name, package)

    def __eq__(self, other):
        if not isinstance(other, ResourceReference):
            return NotImplemented
        return (self.package, self.type, self.name) == (other.package, other.type, other.name)

    def __hash__(self):
        return hash((self.package, self.type, self.name))

    def __str__(self):
        return "{}/{}".format(self.type, self.name)

    def __repr__(self):
        return "<ResourceReference {}>".format(self)


class Application(object):
    """
    The ``<application>`` element of the manifest, reduced to the
    references of its icon and label.
    Both are empty strings when unset.
    """

    def __init__(self, icon="", label=""):
        self.icon = icon
        self.label = label

    def is_filled(self):
        return len(self.icon) > 0 and len(self.label) > 0

    def get_icon_reference(self):
        return ResourceReference.parse(self.icon)

    def get_label_reference(self):
        return ResourceReference.parse(self.label)

    def __repr__(self):
        return "<Application icon={!r} label={!r}>".format(self.icon, self.label)


class Manifest(object):

    def __init__(self, package="", version_code=0, version_name="", application=None):
        self.package = package
        self.version_code = version_code
        self.version_name = version_name
        self.application = application if application is not None else Application()

    def __repr__(self):
        return "<Manifest package={!r} version_code={} version_name={!r}>".format(
            self.package, self.version_code, self.version_name)


def parse_version_code(value, default=0):
    """
    Parse a versionCode attribute as a base-10 signed 64-bit integer.

    :param value: the literal attribute value
    :param default: returned if value is not a valid integer
    :rtype: int
    """
    if value is None or not DECIMAL_RE.match(value):
        log.debug("Ignoring invalid versionCode '{}'".format(value))
        return default

    code = int(value, 10)
    if not const.INT64_MIN <= code <= const.INT64_MAX:
        log.debug("Ignoring out of range versionCode '{}'".format(value))
        return default
    return code


class ManifestExtractor(object):
    """
    Walks a decoded compiled manifest (:class:`pyaabparser.protos.XmlNode`)
    and collects package identity and the application icon/label references.

    Extraction never fails: missing elements or attributes leave the
    corresponding :class:`Manifest` fields empty.
    """

    def __init__(self, xml_node):
        self.root = xml_node

    def extract(self):
        """
        :rtype: :class:`Manifest`
        """
        manifest = Manifest()
        element = self.root.element

        for attr in element.attribute:
            if attr.name == const.ATTR_PACKAGE:
                manifest.package = attr.value
            elif attr.name == const.ATTR_VERSION_CODE:
                manifest.version_code = parse_version_code(attr.value, manifest.version_code)
            elif attr.name == const.ATTR_VERSION_NAME:
                manifest.version_name = attr.value

        application = self._find_application(element)
        if application is None:
            log.debug("No <application> element in the manifest")
        else:
            self._read_application(application, manifest.application)

        return manifest

    def _find_application(self, element):
        # First match wins
        for child in element.child:
            if child.WhichOneof("node") != "element":
                continue
            if child.element.name == const.TAG_APPLICATION:
                return child.element
        return None

    def _read_application(self, element, app):
        for attr in element.attribute:
            if not attr.HasField("compiled_item"):
                continue
            if attr.compiled_item.WhichOneof("value") != "ref":
                continue

            ref = attr.compiled_item.ref
            if attr.name == const.ATTR_ICON:
                app.icon = ref.name
            elif attr.name == const.ATTR_LABEL:
                app.label = ref.name

            if app.is_filled():
                break


def parse_manifest(xml_node):
    """
    Shortcut for ``ManifestExtractor(xml_node).extract()``
    """
    return ManifestExtractor(xml_node).extract()
