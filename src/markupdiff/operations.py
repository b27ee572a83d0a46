# -*- coding: utf-8 -*-
"""
Edit operations derived from the matching blocks.

An operation describes a run of consecutive tokens that is equal in both
documents, inserted, deleted or replaced.  Ranges are inclusive; the before
range of an insert and the after range of a delete have no end (`None`).
"""
import logging
from collections import namedtuple

from .config import _single_space_re
from .matcher import Match, create_segment, find_matching_blocks

logger = logging.getLogger(__name__)

EQUAL = 'equal'
INSERT = 'insert'
DELETE = 'delete'
REPLACE = 'replace'

Operation = namedtuple('Operation', [
    'action', 'start_in_before', 'end_in_before', 'start_in_after', 'end_in_after',
])


def _is_single_whitespace(op, before_tokens):
    if op.action != EQUAL or op.end_in_before != op.start_in_before:
        return False
    return _single_space_re.match(before_tokens[op.start_in_before].text) is not None


def merge_replace_operations(operations, before_tokens):
    """
    Drop a replace that directly follows another replace, and a single
    whitespace equal that directly follows a replace.  The earlier replace
    is kept as it is; its ranges are not widened.
    """
    rv = []
    last_action = None
    for op in operations:
        if last_action == REPLACE and (op.action == REPLACE or _is_single_whitespace(op, before_tokens)):
            logger.debug('Dropping %r after a replace', op)
            continue
        rv.append(op)
        last_action = op.action
    return rv


def calculate_operations(before_tokens, after_tokens):
    """
    Get the list of operations that turn `before_tokens` into `after_tokens`.

    >>> from markupdiff.tokenizer import tokenize
    >>> for op in calculate_operations(tokenize('working on it'), tokenize('working in it')):
    ...     print(op.action, op.start_in_before, op.end_in_before, op.start_in_after, op.end_in_after)
    equal 0 1 0 1
    replace 2 2 2 2
    equal 3 4 3 4
    """
    if before_tokens is None:
        raise ValueError('Missing before_tokens')
    if after_tokens is None:
        raise ValueError('Missing after_tokens')

    segment = create_segment(before_tokens, after_tokens, 0, 0)
    matches = find_matching_blocks(segment)
    # Zero-length match pinned at the end so a trailing gap is emitted too.
    matches.append(Match(len(before_tokens), len(after_tokens), 0, segment))

    operations = []
    position_in_before = 0
    position_in_after = 0
    for match in matches:
        action = None
        if position_in_before == match.start_in_before:
            if position_in_after != match.start_in_after:
                action = INSERT
        else:
            action = DELETE
            if position_in_after != match.start_in_after:
                action = REPLACE

        if action is not None:
            operations.append(Operation(
                action,
                position_in_before,
                match.start_in_before - 1 if action != INSERT else None,
                position_in_after,
                match.start_in_after - 1 if action != DELETE else None,
            ))
        if match.length:
            operations.append(Operation(
                EQUAL,
                match.start_in_before, match.end_in_before,
                match.start_in_after, match.end_in_after,
            ))
        position_in_before = match.end_in_before + 1
        position_in_after = match.end_in_after + 1

    rv = merge_replace_operations(operations, before_tokens)
    logger.debug('Calculated %d operations from %d matching blocks',
                 len(rv), len(matches) - 1)
    return rv
