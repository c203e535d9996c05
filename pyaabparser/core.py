import hashlib
import logging
import zipfile

from google.protobuf.message import DecodeError

from pyaabparser import protos
from pyaabparser.exceptions import InvalidManifestError, InvalidResourceTableError
from pyaabparser.imaging import ImageDecoder
from pyaabparser.manifest import ManifestExtractor, ResourceReference
from pyaabparser.restable import ResourceTable
from pyaabparser.utils import get_zip_file
from pyaabparser.xmlprinter import XMLPrinter
import pyaabparser.constants as const

log = logging.getLogger("pyaabparser.core")


class Error(Exception):
    """Base class for exceptions in this module."""
    pass


class FileNotPresent(Error):
    pass


class BrokenAABError(Error):
    pass


class IconNotFound(Error):
    pass


class AAB(object):

    def __init__(self, filename, raw=False, testzip=False, image_decoder=None):
        """
        This class gives access to the metadata of an Android App Bundle

        example::

            AAB("myfile.aab")
            AAB(read("myfile.aab"), raw=True)

            with AAB.open("myfile.aab") as aab:
                aab.get_app_name()

        The manifest and the resource table are decoded here, the icon file
        is only read when requested. Call :meth:`close` when done, or use the
        object as a context manager; a stream passed in is left open.

        :param filename: specify the path of the file, a binary stream or raw data
        :param raw: specify if the filename is raw data (optional)
        :param testzip: Test the AAB for integrity, e.g. if the ZIP file is broken.
        Throw an exception on failure (default False)
        :param image_decoder: the :class:`~pyaabparser.imaging.ImageDecoder` used by :meth:`icon`

        :type filename: string
        :type raw: boolean
        :type testzip: boolean
        """
        self.filename = filename
        self.image_decoder = image_decoder if image_decoder is not None else ImageDecoder()

        self.xml_node = None
        self.manifest = None
        self.resources = None
        self._printer = None

        if raw is True:
            source = bytes(filename)
            # Set the filename to something sane
            self.filename = "raw_aab_sha256:{}".format(hashlib.sha256(source).hexdigest())
        else:
            source = filename
            if hasattr(filename, "read"):
                self.filename = getattr(filename, "name", "<stream>")

        try:
            self.zip = get_zip_file(source)
        except zipfile.BadZipFile as e:
            raise BrokenAABError("Can not open '{}' as a zip archive: {}".format(self.filename, e)) from e

        try:
            if testzip:
                # Reads every member, slow for large bundles
                ret = self.zip.testzip()
                if ret is not None:
                    raise BrokenAABError("The AAB is probably broken: testzip returned an error.")
            self._aab_analysis()
        except Exception:
            self.zip.close()
            raise

    @classmethod
    def open(cls, resource, **kwargs):
        """
        Open a bundle from a path, a binary stream or raw bytes.
        """
        if isinstance(resource, (bytes, bytearray)):
            kwargs.setdefault("raw", True)
        return cls(resource, **kwargs)

    def _aab_analysis(self):
        """
        Decode the compiled manifest and the resource table.

        Only the package of the resource table matching the manifest package
        is kept.
        """
        manifest_data = self.get_file(const.MANIFEST_PATH)
        xml_node = protos.XmlNode()
        try:
            xml_node.ParseFromString(manifest_data)
        except DecodeError as e:
            raise InvalidManifestError(
                "Error while parsing {}: {}".format(const.MANIFEST_PATH, e)) from e

        self.xml_node = xml_node
        self.manifest = ManifestExtractor(xml_node).extract()
        if not self.manifest.package:
            log.warning("No package name found in {}. Is this an AAB file?".format(const.MANIFEST_PATH))

        resources_data = self.get_file(const.RESOURCES_PATH)
        table = protos.ResourceTable()
        try:
            table.ParseFromString(resources_data)
        except DecodeError as e:
            raise InvalidResourceTableError(
                "Error while parsing {}: {}".format(const.RESOURCES_PATH, e)) from e

        self.resources = ResourceTable(table, self.manifest.package)

    def close(self):
        """
        Release the archive. Calling it again has no effect.
        """
        self.zip.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def get_filename(self):
        """
        Return the filename of the AAB

        :rtype: :class:`str`
        """
        return self.filename

    def get_package(self):
        """
        Return the name of the package

        This information is read from the AndroidManifest.xml

        :rtype: :class:`str`
        """
        return self.manifest.package

    def get_manifest(self):
        """
        :rtype: :class:`~pyaabparser.manifest.Manifest`
        """
        return self.manifest

    def get_androidversion_code(self):
        """
        Return the android version code, 0 if it is not set or not a number

        :rtype: :class:`int`
        """
        return self.manifest.version_code

    def get_androidversion_name(self):
        """
        Return the android version name

        :rtype: :class:`str`
        """
        return self.manifest.version_name

    def get_app_name(self, config=None):
        """
        Return the appname of the AAB

        This name is read from the android:label reference of the application
        and resolved in the resource table.
        If the label is not set, or can not be resolved, an empty string is returned.

        :param config: None, a density or a :class:`~pyaabparser.protos.Configuration`
        :rtype: :class:`str`
        """
        reference = ResourceReference.parse(self.manifest.application.label)
        if reference is None:
            return ""
        return self.resources.resolve_reference(reference, config)

    def label(self, config=None):
        return self.get_app_name(config)

    def get_app_icon(self, config=None):
        """
        Return the path inside the AAB of the icon file, or None if the icon
        can not be resolved.

        When several files match the configuration, the last one in the
        resource table wins.

        :param config: None, a density or a :class:`~pyaabparser.protos.Configuration`
        :rtype: :class:`str`
        """
        reference = ResourceReference.parse(self.manifest.application.icon)
        if reference is None:
            return None
        path = self.resources.resolve_reference(reference, config)
        if not path:
            return None
        return const.BASE_MODULE + path

    def icon(self, config=None):
        """
        Return the decoded application icon.

        :param config: None, a density or a :class:`~pyaabparser.protos.Configuration`
        :rtype: :class:`PIL.Image.Image`
        :raises IconNotFound: if the icon is not set or can not be resolved
        :raises FileNotPresent: if the icon file is missing
        :raises ~pyaabparser.exceptions.ImageDecodeError: if the file is not a supported image
        """
        icon_ref = self.manifest.application.icon
        if not icon_ref:
            raise IconNotFound("No icon resource set in the manifest")

        reference = ResourceReference.parse(icon_ref)
        if reference is None:
            raise IconNotFound("Invalid icon resource '{}'".format(icon_ref))

        path = self.resources.resolve_reference(reference, config)
        if not path:
            raise IconNotFound("Icon resource '{}' could not be resolved".format(icon_ref))

        return self.image_decoder.decode(self.get_file(const.BASE_MODULE + path))

    def get_files(self):
        """
        Return the file names inside the AAB.

        :rtype: a list of :class:`str`
        """
        return self.zip.namelist()

    def get_file(self, filename):
        """
        Return the raw data of the specified filename
        inside the AAB

        :rtype: bytes
        """
        try:
            return self.zip.read(filename)
        except KeyError:
            raise FileNotPresent(filename)
        except zipfile.BadZipFile as e:
            raise BrokenAABError("Can not read '{}': {}".format(filename, e)) from e

    def get_android_manifest_axml(self):
        """
        Return the :class:`~pyaabparser.xmlprinter.XMLPrinter` of the manifest
        """
        if self._printer is None:
            self._printer = XMLPrinter(self.xml_node)
        return self._printer

    def get_android_manifest_xml(self):
        """
        Return the parsed xml object which corresponds to the AndroidManifest.xml file

        :rtype: :class:`~lxml.etree.Element`
        """
        return self.get_android_manifest_axml().get_xml_obj()

    def get_android_resources(self):
        """
        :rtype: :class:`~pyaabparser.restable.ResourceTable`
        """
        return self.resources

    @property
    def application(self):
        return self.get_app_name()

    @property
    def packagename(self):
        return self.get_package()

    @property
    def version_name(self):
        return self.get_androidversion_name()

    @property
    def version_code(self):
        return self.get_androidversion_code()

    @property
    def icon_info(self):
        return self.get_app_icon()

    @property
    def icon_data(self):
        app_icon_file = self.get_app_icon()
        if not app_icon_file:
            return None

        try:
            return self.get_file(app_icon_file)
        except FileNotPresent:
            return None
