# -*- coding: utf-8 -*-
"""
    markupdiff
    ~~~~~~~~~~

    Diffs HTML fragments word by word.  Both versions are merged into one
    document where removed content is wrapped in ``<del>`` and added content
    in ``<ins>``, without breaking the surrounding markup.  Examples:

    >>> from markupdiff import diff

    >>> print(diff('<p>this is some text</p>', '<p>this is some more text</p>'))
    <p>this is some <ins data-operation-index="1">more </ins>text</p>

    >>> print(diff('<p>this is some text</p>', '<p>this is some more text</p>',
    ...            class_name='diff-class'))
    <p>this is some <ins data-operation-index="1" class="diff-class">more </ins>text</p>

    >>> print(diff('Foo bar baz', 'Foo baz'))
    Foo <del data-operation-index="1">bar </del>baz

    >>> print(diff('<p>a</p>', '<p>a</p><p>b</p>'))
    <p>a</p><p data-diff-node="ins" data-operation-index="1"><ins data-operation-index="1">b</ins></p>

    >>> print(diff('<img src="1.jpg">', '<img src="2.jpg">'))
    <del data-operation-index="0"><img src="1.jpg"></del><ins data-operation-index="0"><img src="2.jpg"></ins>
"""
import logging

from .config import DiffConfig, DEFAULT_ATOMIC_TAGS
from .tokenizer import Token, tokenize, create_token
from .matcher import find_matching_blocks
from .operations import Operation, calculate_operations
from .differ import diff, render_operations

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'diff',
    'tokenize',
    'create_token',
    'calculate_operations',
    'find_matching_blocks',
    'render_operations',
    'DiffConfig',
    'DEFAULT_ATOMIC_TAGS',
    'Token',
    'Operation',
]
