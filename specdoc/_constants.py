"""Common literal values used across specdoc.

These constants keep filenames and Markdown markers centralized so the
parser, generators, and tests can import the same values without drifting.
Intended for internal use within the specdoc package.

Examples
--------
>>> from specdoc import _constants
>>> _constants.SPEC_META_TEMPLATE.format(key="checkout-flow")
'.specdoc-checkout-flow-meta.json'
>>> _constants.ANCHOR_TEMPLATE.format(line="# Overview", slug="overview")
'# Overview {#overview}'
"""

SPEC_META_TEMPLATE = ".specdoc-{key}-meta.json"
ANCHOR_TEMPLATE = "{line} {{#{slug}}}"
