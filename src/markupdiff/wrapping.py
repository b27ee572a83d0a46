# -*- coding: utf-8 -*-
"""
Token classification for <ins>/<del> wrapping.

Given the tokens of one operation, decide which of them may go inside a
wrapper.  Text, images, void elements and atomic blocks can; structural tags
can't, since wrapping e.g. a lone ``</p>`` would produce invalid nesting.
When an opening tag is closed within the same operation, it is flagged as a
tag insertion point so the renderer can annotate the tag itself.

For the tokens::

    ['</b>', 'this', ' ', 'is', ' ', '<b>', 'test', '</b>', '!']

the first ``</b>`` is left alone, while ``<b>`` becomes an insertion point
because its closing tag is part of the same list.
"""
from collections import namedtuple
from itertools import groupby

from .config import DEFAULT_ATOMIC_TAGS, _tag_end_re
from .utils import is_void_tag, is_wrappable, tag_name

TokenNote = namedtuple('TokenNote', ['wrappable', 'tag_insertion_point'])


def annotate_tokens(tokens, atomic_tags=DEFAULT_ATOMIC_TAGS):
    """
    Build the per-token notes for a list of token texts.

    >>> notes = annotate_tokens(['</b>', 'hi', '<b>', 'test', '</b>'])
    >>> [n.wrappable for n in notes]
    [False, True, False, True, False]
    >>> [n.tag_insertion_point for n in notes]
    [False, False, True, False, False]
    """
    insertion_points = set()
    tag_stack = []
    for index, token in enumerate(tokens):
        if is_void_tag(token):
            continue
        name = tag_name(token)
        if name is None:
            continue
        if tag_stack and '/' + tag_stack[-1][0] == name:
            insertion_points.add(tag_stack.pop()[1])
        else:
            tag_stack.append((name, index))

    return [
        TokenNote(is_wrappable(token, atomic_tags), index in insertion_points)
        for index, token in enumerate(tokens)
    ]


def group_tokens(tokens, notes):
    """
    Split tokens into maximal runs of equal wrappability.  Yields
    ``(wrappable, run)`` pairs in order.
    """
    pairs = zip(tokens, notes)
    for wrappable, group in groupby(pairs, key=lambda pair: pair[1].wrappable):
        yield wrappable, [token for token, _note in group]


def inject_attrs(opening_tag, attrs):
    """Insert an attribute string right before the closing ``>`` of a tag."""
    return _tag_end_re.sub(lambda m: attrs + m.group(0), opening_tag, count=1)
