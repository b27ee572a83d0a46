# -*- coding: utf-8 -*-
"""
Tokenizer for markupdiff.

Splits an HTML fragment into tokens that the matcher can align: tags, words,
whitespace runs, entities, single punctuation characters and atomic blocks
(e.g. a whole ``<svg>...</svg>`` element).  Every token keeps its literal text
for rendering and a normalized key for comparisons, so two ``<p>`` tags with
different attributes still match while the output keeps the new attributes.
"""
import logging
import re
from collections import namedtuple

from .config import DEFAULT_ATOMIC_TAGS
from .utils import collapse_ws

logger = logging.getLogger(__name__)

Token = namedtuple('Token', ['text', 'key', 'pos'])

# Scanner states
CHAR = 'char'
TAG = 'tag'
ATOMIC_TAG = 'atomic_tag'
HTML_COMMENT = 'html_comment'
WHITESPACE = 'whitespace'
ENTITY = 'entity'

_img_key_re = re.compile(r'^<img.*src=[\'"]([^"\']*)[\'"].*>$')
_object_key_re = re.compile(r'^<object.*data=[\'"]([^"\']*)[\'"]')
_anchor_key_re = re.compile(r'^<a\s.*href=[\'"]([^"\']*)[\'"]')
_media_key_re = re.compile(r'^<(svg|math|video)[\s>]')
_iframe_key_re = re.compile(r'^<iframe.*src=[\'"]([^"\']*)[\'"].*>')
_tag_key_re = re.compile(r'<([^\s>]+)[\s>]')

_UUID_ATTR = 'data-uuid="'
# data-uuid values are generated per instance; cut a fixed span so they
# never prevent two otherwise identical media blocks from matching.
_UUID_SPAN = 44


def key_for_token(text, atomic_tags=DEFAULT_ATOMIC_TAGS):
    """
    Build the key used to compare `text` with tokens of the other document.

    >>> key_for_token('<p class="intro">')
    '<p>'
    >>> key_for_token('<img alt="cat" src="cat.jpg">')
    '<img src="cat.jpg">'
    >>> key_for_token('a\\n\\t b')
    'a b'
    """
    match = _img_key_re.match(text)
    if match:
        return '<img src="%s">' % match.group(1)

    match = _object_key_re.match(text)
    if match:
        return '<object src="%s"></object>' % match.group(1)

    # Atomic anchors are compared as a whole, children included.
    if 'a' in atomic_tags and _anchor_key_re.match(text):
        return text

    if _media_key_re.match(text):
        uuid = text.find(_UUID_ATTR)
        if uuid != -1:
            return text[:uuid] + text[uuid + _UUID_SPAN:]
        return text

    match = _iframe_key_re.match(text)
    if match:
        return '<iframe src="%s"></iframe>' % match.group(1)

    match = _tag_key_re.match(text)
    if match:
        return '<%s>' % match.group(1).lower()

    return collapse_ws(text)


def create_token(text, pos=0, atomic_tags=DEFAULT_ATOMIC_TAGS):
    """Create a token holding the literal text and its comparison key."""
    return Token(text, key_for_token(text, atomic_tags), pos)


def _is_word_char(char):
    return char.isalpha() or '0' <= char <= '9'


class Tokenizer(object):
    """
    Character level state machine.  Each state has its own handler; a handler
    returns `False` when the current character has to be processed again in
    the state it just switched to.
    """

    def __init__(self, markup, atomic_tags=DEFAULT_ATOMIC_TAGS):
        self.markup = markup
        self.atomic_tags = atomic_tags
        self._mode = CHAR
        self._word = ''
        self._word_pos = 0
        self._atomic_tag = None
        self._tokens = None
        self._handlers = {
            CHAR: self._handle_char,
            TAG: self._handle_tag,
            ATOMIC_TAG: self._handle_atomic_tag,
            HTML_COMMENT: self._handle_html_comment,
            WHITESPACE: self._handle_whitespace,
            ENTITY: self._handle_entity,
        }

    def get_tokens(self):
        if self._tokens is None:
            self._tokens = []
            self._scan()
        return self._tokens

    def _scan(self):
        markup = self.markup
        idx = 0
        while idx < len(markup):
            handler = self._handlers.get(self._mode)
            if handler is None:
                raise ValueError('Unknown mode %r' % self._mode)
            if handler(markup[idx], idx):
                idx += 1
        # Unterminated comments are dropped like terminated ones.
        if self._mode != HTML_COMMENT:
            self._flush()
        logger.debug('Tokenized %d characters into %d tokens',
                     len(markup), len(self._tokens))

    def _emit(self, text, pos):
        self._tokens.append(create_token(text, pos, self.atomic_tags))

    def _flush(self):
        if self._word:
            self._emit(self._word, self._word_pos)
        self._word = ''

    def _append(self, char, idx):
        if not self._word:
            self._word_pos = idx
        self._word += char

    def _start(self, char, idx, mode):
        self._flush()
        self._append(char, idx)
        self._mode = mode

    def _handle_char(self, char, idx):
        if char == '<':
            self._start(char, idx, TAG)
        elif char.isspace():
            self._start(char, idx, WHITESPACE)
        elif _is_word_char(char):
            self._append(char, idx)
        elif char == '&':
            self._start(char, idx, ENTITY)
        else:
            # Punctuation is a token of its own.
            self._flush()
            self._emit(char, idx)
        return True

    def _atomic_name(self, char):
        """Name of the atomic tag being opened, once its name is complete."""
        if char != '>' and char != '/' and not char.isspace():
            return None
        name = self._word[1:].lower()
        if name in self.atomic_tags:
            return name
        return None

    def _handle_tag(self, char, idx):
        atomic_tag = self._atomic_name(char)
        if atomic_tag:
            self._atomic_tag = atomic_tag
            self._mode = ATOMIC_TAG
            self._word += char
        elif self._word.startswith('<!--'):
            self._mode = HTML_COMMENT
            self._word += char
        elif char == '>':
            self._word += char
            self._flush()
            self._mode = CHAR
        else:
            self._word += char
        return True

    def _handle_atomic_tag(self, char, idx):
        if char == '>':
            closing = '</' + self._atomic_tag
            word = self._word
            self_closing = word.endswith('/') and '>' not in word
            if self_closing or word[-len(closing):].lower() == closing:
                self._word += char
                self._flush()
                self._atomic_tag = None
                self._mode = CHAR
                return True
        self._word += char
        return True

    def _handle_html_comment(self, char, idx):
        self._word += char
        if self._word.endswith('-->'):
            self._word = ''
            self._mode = CHAR
        return True

    def _handle_whitespace(self, char, idx):
        if char == '<':
            self._start(char, idx, TAG)
        elif char.isspace():
            self._word += char
        else:
            self._flush()
            self._mode = CHAR
            return False
        return True

    def _handle_entity(self, char, idx):
        if char == ';':
            self._word += char
            self._flush()
            self._mode = CHAR
        elif char == '<' or char.isspace():
            # Not an entity after all (e.g. "Tom & Jerry"); keep what we have
            # as text and look at this character again.
            self._flush()
            self._mode = CHAR
            return False
        else:
            self._word += char
        return True


def tokenize(markup, atomic_tags=DEFAULT_ATOMIC_TAGS):
    """
    Tokenize a string of HTML.

    >>> [t.text for t in tokenize('<p>Hi, there</p>')]
    ['<p>', 'Hi', ',', ' ', 'there', '</p>']
    """
    return Tokenizer(markup, atomic_tags).get_tokens()
