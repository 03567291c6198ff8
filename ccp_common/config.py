"""Read the package's config file.

Values can be set in a `ccp.toml` file in the working directory (or the file
named by the `CCP_COMMON_CONFIG` environment variable):

    [reader]
    buffer_size = 65536
    encoding = "UTF-8"

    [download]
    max_attempts = 3
    retry_wait = 1.0

    [storage]
    cache_dir = "/path/to/cache"

Anything not set in the file keeps the default below. Values are read at call
time by the modules using them so they can also be changed at runtime.
"""

import os
import tomllib

_conf_file = os.getenv("CCP_COMMON_CONFIG") or "ccp.toml"
try:
    with open(_conf_file, "rb") as fp:
        conf = tomllib.load(fp)
except FileNotFoundError:
    conf = {}

buffer_size = 65536
encoding = "UTF-8"
max_attempts = 3
retry_wait = 1.0
cache_dir: str | None = None

if "reader" in conf:
    buffer_size = conf["reader"].get("buffer_size", buffer_size)
    encoding = conf["reader"].get("encoding", encoding)

if "download" in conf:
    max_attempts = conf["download"].get("max_attempts", max_attempts)
    retry_wait = conf["download"].get("retry_wait", retry_wait)

if "storage" in conf:
    cache_dir = conf["storage"].get("cache_dir", cache_dir)
