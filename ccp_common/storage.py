__all__ = [
    "set_cache_dir",
    "default_cache_dir",
    "list_cache",
    "delete_from_cache",
    "_storage_factory",
]

import synstore

from ccp_common import __name__ as pkg_name
from ccp_common import config

synstore.set_package_name(pkg_name)

set_cache_dir = synstore.set_cache_dir
default_cache_dir = synstore.default_cache_dir
list_cache = synstore.list_cache
delete_from_cache = synstore.delete_from_cache
_storage_factory = synstore.storage_factory

if config.cache_dir:
    set_cache_dir(config.cache_dir)
