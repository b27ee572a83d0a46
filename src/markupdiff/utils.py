# -*- coding: utf-8 -*-
"""
Utility functions for markupdiff.
"""
import re

from html5lib.constants import voidElements

from .config import (
    DEFAULT_ATOMIC_TAGS, _tag_re, _void_tag_re, _img_tag_re, _space_key_re
)

_tag_name_re = re.compile(r'^<([A-Za-z][^\s>/]*)')


def tag_name(token):
    """
    Return the lower-cased name of a tag token (``'p'``, ``'/p'``) or `None`
    when the token is not a plain tag.  Comments, declarations and atomic
    blocks containing nested tags are not plain tags.
    """
    match = _tag_re.match(token)
    if match is None:
        return None
    parts = match.group(1).split()
    if not parts:
        return None
    return parts[0].lower()


def is_void_tag(token):
    """Self-closing tags (``<br/>``) and HTML void elements (``<br>``)."""
    if _void_tag_re.match(token):
        return True
    name = tag_name(token)
    return name is not None and name.rstrip('/') in voidElements


def atomic_tag_name(token, atomic_tags=DEFAULT_ATOMIC_TAGS):
    """Name of the atomic element `token` opens, or `None`."""
    match = _tag_name_re.match(token)
    if match is None:
        return None
    name = match.group(1).lower()
    if name in atomic_tags:
        return name
    return None


def is_wrappable(token, atomic_tags=DEFAULT_ATOMIC_TAGS):
    """
    Check whether a token can be enclosed in an <ins>/<del> marker on its own
    without breaking the markup hierarchy.
    """
    return (
        _img_tag_re.match(token) is not None
        or tag_name(token) is None
        or atomic_tag_name(token, atomic_tags) is not None
        or is_void_tag(token)
    )


def collapse_ws(s):
    """Collapse whitespace, ``&nbsp;`` and ``&#160;`` runs into a single space."""
    return _space_key_re.sub(' ', s)
