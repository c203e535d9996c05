import io
import os.path
import unittest

from pyaabparser import AAB, BrokenAABError, FileNotPresent, IconNotFound
from pyaabparser import InvalidManifestError, InvalidResourceTableError, ImageDecodeError
from pyaabparser.restable import make_config
from pyaabparser.utils import read
import pyaabparser.constants as const

from aab_builder import (
    ICON_XXHDPI, ICON_XXXHDPI, build_aab, default_table, file_value, make_image,
    make_manifest, make_package, make_table, string_value)

# truncated length delimited field
BROKEN_PROTO = b"\x12\x05ab"


def test_app_name_extraction():
    aab = AAB(build_aab(), raw=True)

    assert aab.get_package() == "com.example.app"
    assert aab.get_manifest().version_name == "1.0"
    assert aab.get_manifest().version_code == 1
    assert aab.get_app_name() == "My Application"
    icon = aab.icon(make_config(const.DENSITY_XXXHIGH))
    assert icon.size == (192, 192)

    aab.close()


class AABTest(unittest.TestCase):
    def setUp(self):
        self.aab = AAB.open(build_aab())

    def tearDown(self):
        self.aab.close()

    def test_manifest(self):
        self.assertEqual(self.aab.packagename, "com.example.app")
        self.assertEqual(self.aab.version_code, 1)
        self.assertEqual(self.aab.version_name, "1.0")
        self.assertEqual(self.aab.get_androidversion_code(), 1)
        self.assertEqual(self.aab.get_androidversion_name(), "1.0")
        self.assertEqual(self.aab.manifest.application.icon, "mipmap/ic_launcher")
        self.assertEqual(self.aab.manifest.application.label, "string/app_name")
        self.assertTrue(self.aab.get_filename().startswith("raw_aab_sha256:"))

    def test_label(self):
        self.assertEqual(self.aab.label(), "My Application")
        self.assertEqual(self.aab.label(const.DENSITY_XXXHIGH), "My Application")
        self.assertEqual(self.aab.application, "My Application")

    def test_icon_path(self):
        self.assertEqual(self.aab.get_app_icon(const.DENSITY_XXHIGH), "base/" + ICON_XXHDPI)
        self.assertEqual(self.aab.get_app_icon(const.DENSITY_XXXHIGH), "base/" + ICON_XXXHDPI)
        # last match wins
        self.assertEqual(self.aab.icon_info, "base/" + ICON_XXXHDPI)
        self.assertIsNone(self.aab.get_app_icon(const.DENSITY_MEDIUM))

    def test_icon(self):
        image = self.aab.icon(const.DENSITY_XXHIGH)
        self.assertEqual(image.format, "PNG")
        self.assertEqual(image.size, (144, 144))
        self.assertEqual(self.aab.icon().size, (192, 192))

    def test_icon_data(self):
        self.assertEqual(self.aab.icon_data, self.aab.get_file("base/" + ICON_XXXHDPI))

    def test_repeated_calls(self):
        density = const.DENSITY_XXXHIGH
        self.assertEqual(self.aab.label(density), self.aab.label(density))
        self.assertEqual(self.aab.icon(density).tobytes(), self.aab.icon(density).tobytes())

    def test_files(self):
        self.assertIn(const.MANIFEST_PATH, self.aab.get_files())
        self.assertIn(const.RESOURCES_PATH, self.aab.get_files())
        with self.assertRaises(FileNotPresent) as cm:
            self.aab.get_file("base/res/missing.png")
        self.assertEqual(str(cm.exception), "base/res/missing.png")

    def test_resources(self):
        resources = self.aab.get_android_resources()
        self.assertEqual(resources.package_name, "com.example.app")
        self.assertEqual(resources.resolve("string", "app_name"), "My Application")

    def test_manifest_xml(self):
        xml = self.aab.get_android_manifest_xml()
        self.assertEqual(xml.tag, "manifest")
        self.assertEqual(xml.get("package"), "com.example.app")
        application = xml.find("application")
        self.assertEqual(application.get(const.NS_ANDROID + "label"), "@string/app_name")
        self.assertIs(self.aab.get_android_manifest_axml(), self.aab.get_android_manifest_axml())


class OpenTest(unittest.TestCase):
    def test_open_stream(self):
        stream = io.BytesIO(build_aab())
        with AAB.open(stream) as aab:
            self.assertEqual(aab.get_package(), "com.example.app")
            self.assertEqual(aab.get_filename(), "<stream>")
            self.assertEqual(aab.icon(const.DENSITY_XXXHIGH).size, (192, 192))
        # the stream belongs to the caller
        self.assertFalse(stream.closed)

    def test_close_twice(self):
        aab = AAB(build_aab(), raw=True)
        aab.close()
        aab.close()

    def test_not_a_zip(self):
        with self.assertRaises(BrokenAABError):
            AAB(b"not a zip file at all", raw=True)

    def test_missing_manifest(self):
        with self.assertRaises(FileNotPresent) as cm:
            AAB(build_aab(manifest=False), raw=True)
        self.assertEqual(str(cm.exception), const.MANIFEST_PATH)

    def test_missing_resources(self):
        with self.assertRaises(FileNotPresent) as cm:
            AAB(build_aab(table=False), raw=True)
        self.assertEqual(str(cm.exception), const.RESOURCES_PATH)

    def test_broken_manifest(self):
        with self.assertRaises(InvalidManifestError):
            AAB(build_aab(manifest_bytes=BROKEN_PROTO), raw=True)

    def test_broken_resources(self):
        with self.assertRaises(InvalidResourceTableError):
            AAB(build_aab(resources_bytes=BROKEN_PROTO), raw=True)

    def test_testzip(self):
        aab = AAB(build_aab(), raw=True, testzip=True)
        self.assertEqual(aab.get_package(), "com.example.app")
        aab.close()


class IconErrorTest(unittest.TestCase):
    def _open(self, **kwargs):
        return AAB(build_aab(**kwargs), raw=True)

    def test_no_icon_reference(self):
        aab = self._open(manifest=make_manifest(icon=None))
        with self.assertRaises(IconNotFound):
            aab.icon()
        self.assertIsNone(aab.get_app_icon())
        self.assertIsNone(aab.icon_data)

    def test_malformed_icon_reference(self):
        aab = self._open(manifest=make_manifest(icon="ic_launcher"))
        with self.assertRaises(IconNotFound):
            aab.icon(const.DENSITY_XXXHIGH)

    def test_unresolved_icon(self):
        aab = self._open()
        with self.assertRaises(IconNotFound):
            aab.icon(const.DENSITY_LOW)

    def test_missing_icon_file(self):
        aab = self._open(files={})
        with self.assertRaises(FileNotPresent):
            aab.icon(const.DENSITY_XXXHIGH)
        self.assertIsNone(aab.icon_data)

    def test_icon_not_an_image(self):
        aab = self._open(files={"base/" + ICON_XXXHDPI: b"<adaptive-icon/>"})
        with self.assertRaises(ImageDecodeError):
            aab.icon(const.DENSITY_XXXHIGH)

    def test_drawable_icon(self):
        table = make_table(make_package("com.example.app", {
            "drawable": {"icon": [(0, file_value("res/drawable/icon.jpg"))]},
        }))
        aab = self._open(
            manifest=make_manifest(icon="drawable/icon"),
            table=table,
            files={"base/res/drawable/icon.jpg": make_image((10, 12), "JPEG")},
        )
        self.assertEqual(aab.icon(const.DENSITY_XHIGH).size, (10, 12))


class LabelTest(unittest.TestCase):
    def test_no_label(self):
        aab = AAB(build_aab(manifest=make_manifest(label=None)), raw=True)
        self.assertEqual(aab.get_app_name(), "")

    def test_malformed_label(self):
        aab = AAB(build_aab(manifest=make_manifest(label="string/app/name")), raw=True)
        self.assertEqual(aab.get_app_name(), "")

    def test_package_mismatch(self):
        aab = AAB(build_aab(table=default_table("com.example.renamed")), raw=True)
        self.assertEqual(aab.get_app_name(), "")
        with self.assertRaises(IconNotFound):
            aab.icon(const.DENSITY_XXXHIGH)

    def test_label_by_density(self):
        table = make_table(make_package("com.example.app", {
            "string": {"app_name": [
                (0, string_value("Default")),
                (const.DENSITY_XHIGH, string_value("Xhdpi")),
                (const.DENSITY_XHIGH, string_value("Xhdpi again")),
            ]},
        }))
        aab = AAB(build_aab(table=table), raw=True)
        self.assertEqual(aab.label(const.DENSITY_XHIGH), "Xhdpi again")
        self.assertEqual(aab.label(const.DENSITY_MEDIUM), "Default")
        self.assertEqual(aab.label(), "Xhdpi again")

    def test_invalid_version_code(self):
        aab = AAB(build_aab(manifest=make_manifest(version_code="1.2.3")), raw=True)
        self.assertEqual(aab.get_androidversion_code(), 0)
        self.assertEqual(aab.get_package(), "com.example.app")


def test_open_path(tmp_path):
    path = tmp_path / "app.aab"
    path.write_bytes(build_aab())

    with AAB(str(path)) as aab:
        assert aab.get_filename() == str(path)
        assert aab.get_package() == "com.example.app"

    with AAB(read(str(path)), raw=True) as aab:
        assert aab.get_package() == "com.example.app"
        assert aab.label() == "My Application"
        assert aab.icon(const.DENSITY_XXXHIGH).size == (192, 192)


def test_open_missing_path(tmp_path):
    missing = os.path.join(str(tmp_path), "missing.aab")
    try:
        AAB(missing)
    except OSError:
        pass
    else:
        raise AssertionError("opening a missing file should fail")
