# -*- coding: utf-8 -*-
"""
Matching blocks finder.

Finds runs of tokens that appear in both documents.  The single longest run of
a segment is located first, then the unmatched areas on each side of it become
new segments that are searched the same way.  Segments are kept on an explicit
stack so deeply fragmented documents never hit the recursion limit.

This is a greedy heuristic: once a run is picked it is never revisited, so the
result is not guaranteed to be a longest common subsequence.
"""
import logging
from bisect import bisect_left

logger = logging.getLogger(__name__)


def create_map(tokens):
    """
    Map every token key to the ascending list of indices where it occurs.
    """
    rv = {}
    for index, token in enumerate(tokens):
        rv.setdefault(token.key, []).append(index)
    return rv


class Segment(object):
    """
    A view over a contiguous range of the before tokens and a contiguous range
    of the after tokens.  `before_index` and `after_index` are the positions of
    those ranges in the whole documents.
    """

    def __init__(self, before_tokens, after_tokens, before_index, after_index):
        self.before_tokens = before_tokens
        self.after_tokens = after_tokens
        self.before_index = before_index
        self.after_index = after_index
        self.before_map = create_map(before_tokens)
        self.after_map = create_map(after_tokens)

    def __repr__(self):
        return '<Segment before=%d+%d after=%d+%d>' % (
            self.before_index, len(self.before_tokens),
            self.after_index, len(self.after_tokens))


def create_segment(before_tokens, after_tokens, before_index, after_index):
    return Segment(before_tokens, after_tokens, before_index, after_index)


class Match(object):
    """
    A run of `length` tokens with equal keys.  ``start_*``/``end_*`` are
    global (whole document) positions, ``segment_*`` are relative to the
    segment the match was found in.  Ends are inclusive.
    """

    __slots__ = (
        'segment', 'length',
        'start_in_before', 'end_in_before', 'start_in_after', 'end_in_after',
        'segment_start_in_before', 'segment_end_in_before',
        'segment_start_in_after', 'segment_end_in_after',
    )

    def __init__(self, start_in_before, start_in_after, length, segment):
        self.segment = segment
        self.length = length
        self.segment_start_in_before = start_in_before
        self.segment_start_in_after = start_in_after
        self.segment_end_in_before = start_in_before + length - 1
        self.segment_end_in_after = start_in_after + length - 1
        self.start_in_before = start_in_before + segment.before_index
        self.start_in_after = start_in_after + segment.after_index
        self.end_in_before = self.start_in_before + length - 1
        self.end_in_after = self.start_in_after + length - 1

    def __repr__(self):
        return '<Match before=%d..%d after=%d..%d length=%d>' % (
            self.start_in_before, self.end_in_before,
            self.start_in_after, self.end_in_after, self.length)


def compare_matches(m1, m2):
    """
    Return -1 if `m2` lies entirely before `m1` (on both sides), 1 if it lies
    entirely after it, and 0 if the two overlap or criss-cross.
    """
    if m2.end_in_before < m1.start_in_before and m2.end_in_after < m1.start_in_after:
        return -1
    if m2.start_in_before > m1.end_in_before and m2.start_in_after > m1.end_in_after:
        return 1
    return 0


class MatchList(object):
    """
    Matches sorted by document position.  A match that overlaps (or
    criss-crosses) one already stored is rejected.
    """

    def __init__(self):
        self._matches = []
        self._starts = []

    def add(self, match):
        idx = bisect_left(self._starts, match.start_in_before)
        if idx > 0 and compare_matches(self._matches[idx - 1], match) != 1:
            logger.debug('Dropping %r, it overlaps %r', match, self._matches[idx - 1])
            return False
        if idx < len(self._matches) and compare_matches(self._matches[idx], match) != -1:
            logger.debug('Dropping %r, it overlaps %r', match, self._matches[idx])
            return False
        self._matches.insert(idx, match)
        self._starts.insert(idx, match.start_in_before)
        return True

    def __iter__(self):
        return iter(self._matches)

    def __len__(self):
        return len(self._matches)


def get_full_match(segment, before_start, after_start, min_length, look_behind):
    """
    Extend a single token match as far as it goes in both token lists.

    Returns `None` when the match cannot be longer than `min_length`.  With
    `look_behind`, a whitespace token sitting right before the match on both
    sides (skipped by `find_best_match`) is pulled into it.
    """
    before_tokens = segment.before_tokens
    after_tokens = segment.after_tokens

    min_before_index = before_start + min_length
    min_after_index = after_start + min_length
    if min_before_index >= len(before_tokens) or min_after_index >= len(after_tokens):
        return None

    # Quick check: to beat min_length the token right after that length has
    # to match as well.
    if min_length:
        if before_tokens[min_before_index].key != after_tokens[min_after_index].key:
            return None

    length = 1
    while (before_start + length < len(before_tokens)
           and after_start + length < len(after_tokens)
           and before_tokens[before_start + length].key == after_tokens[after_start + length].key):
        length += 1

    if look_behind and before_start > 0 and after_start > 0:
        if (before_tokens[before_start - 1].key == ' '
                and after_tokens[after_start - 1].key == ' '):
            before_start -= 1
            after_start -= 1
            length += 1

    return Match(before_start, after_start, length, segment)


def find_best_match(segment):
    """
    Find the longest matching run in `segment`, or `None`.  On equal lengths
    the first run found wins.
    """
    before_tokens = segment.before_tokens
    after_map = segment.after_map
    last_space = None
    best_match = None

    for before_index, before_token in enumerate(before_tokens):
        # Nothing left can be longer than what we already have.
        if best_match is not None and len(before_tokens) - before_index < best_match.length:
            break

        # Whitespace is everywhere; starting matches on it is slow and noisy.
        # Remember it so the next match can absorb it via look-behind.
        if before_token.key == ' ':
            last_space = before_index
            continue

        look_behind = last_space == before_index - 1
        for after_index in after_map.get(before_token.key, ()):
            best_length = best_match.length if best_match is not None else 0
            match = get_full_match(segment, before_index, after_index, best_length, look_behind)
            if match is not None and match.length > best_length:
                best_match = match

    return best_match


def find_matching_blocks(segment):
    """
    Find all matching blocks of `segment`, ordered by document position.
    """
    matches = MatchList()
    segments = [segment]
    processed = 0

    while segments:
        current = segments.pop()
        processed += 1
        match = find_best_match(current)
        if match is None or not match.length:
            continue

        if match.segment_start_in_before > 0 and match.segment_start_in_after > 0:
            segments.append(create_segment(
                current.before_tokens[:match.segment_start_in_before],
                current.after_tokens[:match.segment_start_in_after],
                current.before_index,
                current.after_index))

        right_before_tokens = current.before_tokens[match.segment_end_in_before + 1:]
        right_after_tokens = current.after_tokens[match.segment_end_in_after + 1:]
        if right_before_tokens and right_after_tokens:
            segments.append(create_segment(
                right_before_tokens,
                right_after_tokens,
                current.before_index + match.segment_end_in_before + 1,
                current.after_index + match.segment_end_in_after + 1))

        matches.add(match)

    logger.debug('Searched %d segments, found %d matching blocks', processed, len(matches))
    return list(matches)
