# Members of the base module inside an Android App Bundle
BASE_MODULE = "base/"
MANIFEST_PATH = "base/manifest/AndroidManifest.xml"
RESOURCES_PATH = "base/resources.pb"

# Resource types the resolver knows how to extract a value from
RES_TYPE_STRING = "string"
RES_TYPE_DRAWABLE = "drawable"
RES_TYPE_MIPMAP = "mipmap"
FILE_RES_TYPES = (RES_TYPE_MIPMAP, RES_TYPE_DRAWABLE)

# Manifest attribute names
ATTR_PACKAGE = "package"
ATTR_VERSION_CODE = "versionCode"
ATTR_VERSION_NAME = "versionName"
ATTR_ICON = "icon"
ATTR_LABEL = "label"
TAG_APPLICATION = "application"

# Screen densities, see
# https://developer.android.com/ndk/reference/group___configuration.html
DENSITY_DEFAULT = 0
DENSITY_LOW = 120
DENSITY_MEDIUM = 160
DENSITY_HIGH = 240
DENSITY_XHIGH = 320
DENSITY_XXHIGH = 480
DENSITY_XXXHIGH = 640

# versionCode is a signed 64-bit integer
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# Reference.type values in the aapt2 schema
REFERENCE_TYPE_REFERENCE = 0
REFERENCE_TYPE_ATTRIBUTE = 1

# Units of complex dimension and fraction values
COMPLEX_UNIT_MASK = 0x0F
DIMENSION_UNITS = ["px", "dip", "sp", "pt", "in", "mm"] + [""] * 10
FRACTION_UNITS = ["%", "%p"] + [""] * 14

NS_ANDROID_URI = "http://schemas.android.com/apk/res/android"
NS_ANDROID = "{{{}}}".format(NS_ANDROID_URI)  # Namespace as used by etree
