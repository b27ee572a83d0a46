# -*- coding: utf-8 -*-
"""
Configuration and constants for markupdiff.
"""
import re

# Tags whose whole subtree is compared (and rendered) as a single token.
DEFAULT_ATOMIC_TAGS = frozenset([
    'iframe', 'object', 'math', 'svg', 'script', 'video', 'head', 'style',
])

# Regular expressions (shared with other modules)
_tag_re = re.compile(r'^\s*<([^!>][^>]*)>\s*$')
_void_tag_re = re.compile(r'^\s*<[^>]+/>\s*$')
_img_tag_re = re.compile(r'^<img[\s>/]', re.I)
_space_key_re = re.compile(r'(?:\s|&nbsp;|&#160;)+', re.U)
_single_space_re = re.compile(r'^\s$', re.U)
_tag_end_re = re.compile(r'>\s*$')


def parse_atomic_tags(atomic_tags):
    """
    Normalize an atomic tag option into a frozenset of lower-cased names.

    Accepts a comma separated string (``'head,script,style'``) or any iterable
    of names.  An empty value means "use the defaults".
    """
    if not atomic_tags:
        return DEFAULT_ATOMIC_TAGS
    if isinstance(atomic_tags, str):
        atomic_tags = atomic_tags.split(',')
    names = frozenset(name.strip().lower() for name in atomic_tags if name.strip())
    return names or DEFAULT_ATOMIC_TAGS


class DiffConfig(object):
    """
    Runtime configuration for diff rendering.

    Class attributes are the defaults; pass keyword arguments (or set
    attributes on an instance) to override them for a single call.
    """

    # Added as a ``class`` attribute on every <ins>/<del> wrapper.
    class_name = None

    # Wrapper attribute becomes ``data-<prefix>-operation-index``.
    data_prefix = None

    atomic_tags = DEFAULT_ATOMIC_TAGS

    def __init__(self, class_name=None, data_prefix=None, atomic_tags=None):
        if class_name:
            self.class_name = class_name
        if data_prefix:
            self.data_prefix = data_prefix
        if atomic_tags:
            self.atomic_tags = parse_atomic_tags(atomic_tags)

    @property
    def operation_index_attr(self):
        prefix = self.data_prefix + '-' if self.data_prefix else ''
        return 'data-%soperation-index' % prefix

    def __repr__(self):
        return '<DiffConfig class_name=%r data_prefix=%r atomic_tags=%r>' % (
            self.class_name, self.data_prefix, sorted(self.atomic_tags))
