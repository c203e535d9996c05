"""
Message classes for the aapt2 protobuf formats stored in an Android App Bundle.

Only the part of the schema this package reads is declared; field numbers
follow frameworks/base/tools/aapt2/Resources.proto and Configuration.proto so
that every other field is carried as an unknown field and skipped.
Enum-typed fields are declared as uint32, which shares the varint wire format.

The descriptors live in a private pool so that another copy of the aapt2
schema registered in the default pool (e.g. by bundletool bindings) does not
conflict with this one.
"""

from google.protobuf import descriptor_pb2
from google.protobuf import descriptor_pool
from google.protobuf import message_factory

_PACKAGE = "aapt.pb"

_FIELD = descriptor_pb2.FieldDescriptorProto

_SCALARS = {
    "string": _FIELD.TYPE_STRING,
    "uint32": _FIELD.TYPE_UINT32,
    "int32": _FIELD.TYPE_INT32,
    "bool": _FIELD.TYPE_BOOL,
    "float": _FIELD.TYPE_FLOAT,
}

# (message, ((field, number, type[, oneof]), ...))
_SCHEMA = (
    ("SourcePosition", (
        ("line_number", 1, "uint32"),
        ("column_number", 2, "uint32"),
    )),

    # Compiled XML
    ("XmlNode", (
        ("element", 1, "XmlElement", "node"),
        ("text", 2, "string", "node"),
        ("source", 3, "SourcePosition"),
    )),
    ("XmlElement", (
        ("namespace_declaration", 1, "repeated XmlNamespace"),
        ("namespace_uri", 2, "string"),
        ("name", 3, "string"),
        ("attribute", 4, "repeated XmlAttribute"),
        ("child", 5, "repeated XmlNode"),
    )),
    ("XmlNamespace", (
        ("prefix", 1, "string"),
        ("uri", 2, "string"),
        ("source", 3, "SourcePosition"),
    )),
    ("XmlAttribute", (
        ("namespace_uri", 1, "string"),
        ("name", 2, "string"),
        ("value", 3, "string"),
        ("source", 4, "SourcePosition"),
        ("resource_id", 5, "uint32"),
        ("compiled_item", 6, "Item"),
    )),

    # Resource table
    ("ResourceTable", (
        ("package", 2, "repeated Package"),
    )),
    ("PackageId", (
        ("id", 1, "uint32"),
    )),
    ("Package", (
        ("package_id", 1, "PackageId"),
        ("package_name", 2, "string"),
        ("type", 3, "repeated Type"),
    )),
    ("TypeId", (
        ("id", 1, "uint32"),
    )),
    ("Type", (
        ("type_id", 1, "TypeId"),
        ("name", 2, "string"),
        ("entry", 3, "repeated Entry"),
    )),
    ("EntryId", (
        ("id", 1, "uint32"),
    )),
    ("Entry", (
        ("entry_id", 1, "EntryId"),
        ("name", 2, "string"),
        ("config_value", 6, "repeated ConfigValue"),
    )),
    ("ConfigValue", (
        ("config", 1, "Configuration"),
        ("value", 2, "Value"),
    )),
    ("Value", (
        ("comment", 2, "string"),
        ("weak", 3, "bool"),
        ("item", 4, "Item", "value"),
    )),
    ("Item", (
        ("ref", 1, "Reference", "value"),
        ("str", 2, "String", "value"),
        ("raw_str", 3, "RawString", "value"),
        ("file", 5, "FileReference", "value"),
        ("id", 6, "Id", "value"),
        ("prim", 7, "Primitive", "value"),
    )),
    ("Reference", (
        ("type", 1, "uint32"),
        ("id", 2, "uint32"),
        ("name", 3, "string"),
        ("private", 4, "bool"),
    )),
    ("String", (
        ("value", 1, "string"),
    )),
    ("RawString", (
        ("value", 1, "string"),
    )),
    ("FileReference", (
        ("path", 1, "string"),
        ("type", 2, "uint32"),
    )),
    ("Id", ()),
    ("Primitive", (
        ("float_value", 3, "float", "oneof_value"),
        ("int_decimal_value", 6, "int32", "oneof_value"),
        ("int_hexadecimal_value", 7, "uint32", "oneof_value"),
        ("boolean_value", 8, "bool", "oneof_value"),
        ("color_argb8_value", 9, "uint32", "oneof_value"),
        ("color_rgb8_value", 10, "uint32", "oneof_value"),
        ("color_argb4_value", 11, "uint32", "oneof_value"),
        ("color_rgb4_value", 12, "uint32", "oneof_value"),
        ("dimension_value", 13, "uint32", "oneof_value"),
        ("fraction_value", 14, "uint32", "oneof_value"),
    )),

    # Configuration.proto
    ("Configuration", (
        ("mcc", 1, "uint32"),
        ("mnc", 2, "uint32"),
        ("locale", 3, "string"),
        ("layout_direction", 4, "uint32"),
        ("screen_width", 5, "uint32"),
        ("screen_height", 6, "uint32"),
        ("screen_width_dp", 7, "uint32"),
        ("screen_height_dp", 8, "uint32"),
        ("smallest_screen_width_dp", 9, "uint32"),
        ("screen_layout_size", 10, "uint32"),
        ("screen_layout_long", 11, "uint32"),
        ("screen_round", 12, "uint32"),
        ("wide_color_gamut", 13, "uint32"),
        ("hdr", 14, "uint32"),
        ("orientation", 15, "uint32"),
        ("ui_mode_type", 16, "uint32"),
        ("ui_mode_night", 17, "uint32"),
        ("density", 18, "uint32"),
        ("touchscreen", 19, "uint32"),
        ("keys_hidden", 20, "uint32"),
        ("keyboard", 21, "uint32"),
        ("nav_hidden", 22, "uint32"),
        ("navigation", 23, "uint32"),
        ("sdk_version", 24, "uint32"),
        ("product", 25, "string"),
    )),
)


def _add_message(file_proto, name, fields):
    message = file_proto.message_type.add(name=name)
    oneofs = []
    for field_def in fields:
        field_name, number, type_name = field_def[:3]
        oneof = field_def[3] if len(field_def) > 3 else None

        field = message.field.add(name=field_name, number=number)
        if type_name.startswith("repeated "):
            field.label = _FIELD.LABEL_REPEATED
            type_name = type_name[len("repeated "):]
        else:
            field.label = _FIELD.LABEL_OPTIONAL

        if type_name in _SCALARS:
            field.type = _SCALARS[type_name]
        else:
            field.type = _FIELD.TYPE_MESSAGE
            field.type_name = ".{}.{}".format(_PACKAGE, type_name)

        if oneof is not None:
            if oneof not in oneofs:
                oneofs.append(oneof)
                message.oneof_decl.add(name=oneof)
            field.oneof_index = oneofs.index(oneof)


def _build_pool():
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="pyaabparser/aapt_resources.proto",
        package=_PACKAGE,
        syntax="proto3",
    )
    for name, fields in _SCHEMA:
        _add_message(file_proto, name, fields)

    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file_proto.SerializeToString())
    return pool


_POOL = _build_pool()


def _message_class(name):
    descriptor = _POOL.FindMessageTypeByName("{}.{}".format(_PACKAGE, name))
    return message_factory.GetMessageClass(descriptor)


SourcePosition = _message_class("SourcePosition")
XmlNode = _message_class("XmlNode")
XmlElement = _message_class("XmlElement")
XmlNamespace = _message_class("XmlNamespace")
XmlAttribute = _message_class("XmlAttribute")
ResourceTable = _message_class("ResourceTable")
Package = _message_class("Package")
Type = _message_class("Type")
Entry = _message_class("Entry")
ConfigValue = _message_class("ConfigValue")
Value = _message_class("Value")
Item = _message_class("Item")
Reference = _message_class("Reference")
String = _message_class("String")
RawString = _message_class("RawString")
FileReference = _message_class("FileReference")
Id = _message_class("Id")
Primitive = _message_class("Primitive")
Configuration = _message_class("Configuration")
