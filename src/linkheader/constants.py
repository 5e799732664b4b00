"""Constants for the Link header parser.  Overrideable for testing."""

DEFAULT_ENCODING = "us-ascii"
"""Character set assumed for parameters that do not declare one."""

DEFAULT_LANGUAGE = "en-us"
"""Language tag assumed for parameters that do not declare one."""

ENV_PREFIX = "LINKHEADER_"
LINK_HEADER = "Link"
RELATION_PARAM = "rel"
ROOT_LOGGER = "linkheader"
