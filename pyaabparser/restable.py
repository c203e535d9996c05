# This file is part of Androguard.
#
# Copyright (C) 2012/2013, Anthony Desnos <desnos at t0t0.fr>
# All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS-IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging

from pyaabparser import protos
import pyaabparser.constants as const

log = logging.getLogger("pyaabparser.restable")


def make_config(density=const.DENSITY_DEFAULT):
    """
    Build a :class:`pyaabparser.protos.Configuration` for the given density.
    """
    return protos.Configuration(density=density)


def as_config(config):
    """
    Normalize the configuration argument of the lookup functions.

    :param config: None, a density as int or a Configuration message
    :return: None or a Configuration message
    """
    if config is None:
        return None
    if isinstance(config, bool):
        raise TypeError("config should be a Configuration or a density, got a bool")
    if isinstance(config, int):
        return make_config(config)
    if not isinstance(config, protos.Configuration):
        raise TypeError(
            "config should be a Configuration or a density, got {}".format(type(config).__name__))
    return config


def match_config(target, candidate):
    """
    Return True if a value stored under `candidate` can be used for `target`.

    Only the density is compared, all other qualifiers are ignored.
    A missing target, or a density of 0 on either side, matches anything.
    """
    if target is None or target.density == const.DENSITY_DEFAULT:
        return True
    if candidate.density == const.DENSITY_DEFAULT:
        return True
    return target.density == candidate.density


class ResourceTable(object):
    """
    Resolver for the resources.pb table of an App Bundle.

    Only the package named like the manifest package is kept; lookups in any
    other package are not possible.
    Types, entries and configurations are searched linearly, so a lookup costs
    O(types * entries * configs). This is fine for the handful of lookups done
    per bundle, build an index before using it for bulk queries.
    """

    def __init__(self, table, package_name):
        """
        :param table: the decoded :class:`pyaabparser.protos.ResourceTable`, or None
        :param package_name: the package name from the manifest
        """
        self.package_name = package_name
        self.package = None

        if table is None:
            return

        for package in table.package:
            if package.package_name == package_name:
                self.package = package
                break

        if self.package is None:
            log.warning(
                "No package named '{}' in the resource table, found: {}".format(
                    package_name, [p.package_name for p in table.package]))

    @property
    def found(self):
        return self.package is not None

    def get_types(self):
        """
        Return the names of the resource types in the retained package.

        :rtype: a list of str
        """
        if self.package is None:
            return []
        return [t.name for t in self.package.type]

    def _find_entry(self, type_name, name):
        if self.package is None:
            return None

        for res_type in self.package.type:
            if res_type.name != type_name:
                continue
            for entry in res_type.entry:
                if entry.name == name:
                    return entry
        return None

    def get_configs(self, type_name, name):
        """
        Return all (Configuration, Value) pairs stored for a resource,
        in table order.

        :rtype: a list of tuples
        """
        entry = self._find_entry(type_name, name)
        if entry is None:
            return []
        return [(cv.config, cv.value) for cv in entry.config_value]

    def select_value(self, type_name, name, config=None):
        """
        Select the Value of a resource for the given configuration.

        Every matching configuration replaces the previous selection, so the
        last match in table order is returned, not the closest density.

        :param config: None, a density or a Configuration
        :return: a :class:`pyaabparser.protos.Value` or None
        """
        config = as_config(config)
        value = None
        for candidate, candidate_value in self.get_configs(type_name, name):
            if match_config(config, candidate):
                value = candidate_value
        return value

    def resolve(self, type_name, name, config=None):
        """
        Resolve a resource to a string.

        `mipmap` and `drawable` resources resolve to the path of their file,
        `string` resources to their text. Any other type, or a value of the
        wrong kind, resolves to an empty string.

        :param type_name: resource type, e.g. "mipmap"
        :param name: resource name, e.g. "ic_launcher"
        :param config: None, a density or a Configuration
        :rtype: str
        """
        value = self.select_value(type_name, name, config)
        if value is None or value.WhichOneof("value") != "item":
            return ""

        kind = value.item.WhichOneof("value")
        if type_name in const.FILE_RES_TYPES:
            if kind == "file":
                return value.item.file.path
        elif type_name == const.RES_TYPE_STRING:
            if kind == "str":
                return value.item.str.value
        else:
            log.debug("Resources of type '{}' are not resolved".format(type_name))
        return ""

    def resolve_reference(self, reference, config=None):
        """
        Resolve a :class:`pyaabparser.manifest.ResourceReference`.
        """
        if reference is None:
            return ""
        return self.resolve(reference.type, reference.name, config)
