# -*- coding: utf-8 -*-
"""
Rendering of edit operations and the public diff entry point.
"""
import logging

from genshi.core import Stream, QName, Attrs, Markup, START, END, TEXT

from .config import DiffConfig, DEFAULT_ATOMIC_TAGS
from .operations import EQUAL, INSERT, DELETE, REPLACE, calculate_operations
from .tokenizer import tokenize
from .wrapping import annotate_tokens, group_tokens, inject_attrs

logger = logging.getLogger(__name__)

_POS = (None, -1, -1)


class OperationRenderer(object):
    """Turns a list of operations into a Genshi stream of the combined
document.  Token text is passed through untouched as `Markup`; only the
``<ins>``/``<del>`` wrappers are real elements of the stream.  Every wrapper
carries the index of the operation it belongs to, so the ``<del>`` and
``<ins>`` halves of a replace share one index.
"""

    def __init__(self, before_tokens, after_tokens, operations, config=None):
        self.config = config or DiffConfig()
        self.before_tokens = before_tokens
        self.after_tokens = after_tokens
        self.operations = operations
        self._result = None

    def append(self, kind, data, pos=_POS):
        self._result.append((kind, data, pos))

    def append_text(self, text):
        if text:
            self.append(TEXT, Markup(text))

    def _change_attrs(self, op_index):
        """Build Attrs for an <ins>/<del> wrapper."""
        attrs = Attrs([(QName(self.config.operation_index_attr), str(op_index))])
        class_name = getattr(self.config, 'class_name', None)
        if class_name:
            attrs |= [(QName('class'), class_name)]
        return attrs

    def _node_attrs(self, tag, op_index):
        return ' data-diff-node="%s" %s="%d"' % (
            tag, self.config.operation_index_attr, op_index)

    def mark_tokens(self, tag, tokens, op_index):
        """
        Wrap the wrappable runs of `tokens` with `tag` and emit the others
        as they are.  Whitespace-only runs are never wrapped.
        """
        atomic_tags = getattr(self.config, 'atomic_tags', DEFAULT_ATOMIC_TAGS)
        notes = annotate_tokens(tokens, atomic_tags)
        texts = [
            inject_attrs(token, self._node_attrs(tag, op_index)) if note.tag_insertion_point else token
            for token, note in zip(tokens, notes)
        ]
        for wrappable, run in group_tokens(texts, notes):
            content = ''.join(run)
            if wrappable and content.strip():
                tag_qname = QName(tag)
                self.append(START, (tag_qname, self._change_attrs(op_index)))
                self.append_text(content)
                self.append(END, tag_qname)
            else:
                self.append_text(content)

    def equal(self, op, op_index):
        for token in self.after_tokens[op.start_in_after:op.end_in_after + 1]:
            self.append_text(token.text)

    def insert(self, op, op_index):
        tokens = self.after_tokens[op.start_in_after:op.end_in_after + 1]
        self.mark_tokens('ins', [token.text for token in tokens], op_index)

    def delete(self, op, op_index):
        tokens = self.before_tokens[op.start_in_before:op.end_in_before + 1]
        self.mark_tokens('del', [token.text for token in tokens], op_index)

    def replace(self, op, op_index):
        self.delete(op, op_index)
        self.insert(op, op_index)

    def process(self):
        for op_index, op in enumerate(self.operations):
            if op.action == EQUAL:
                self.equal(op, op_index)
            elif op.action == INSERT:
                self.insert(op, op_index)
            elif op.action == DELETE:
                self.delete(op, op_index)
            elif op.action == REPLACE:
                self.replace(op, op_index)
            else:
                raise ValueError('Unknown action %r' % (op.action,))

    def get_diff_stream(self):
        if self._result is None:
            self._result = []
            self.process()
        return Stream(self._result)

    def render(self):
        # Whitespace stripping would alter the documents' own text.
        return self.get_diff_stream().render('html', encoding=None, strip_whitespace=False)


def render_operations(before_tokens, after_tokens, operations, config=None):
    """Render a list of operations into the combined HTML."""
    return OperationRenderer(before_tokens, after_tokens, operations, config=config).render()


def _resolve_config(config, class_name, data_prefix, atomic_tags):
    if config is None:
        return DiffConfig(class_name, data_prefix, atomic_tags)
    # Explicit options win over the given config, which is left untouched.
    return DiffConfig(
        class_name or getattr(config, 'class_name', None),
        data_prefix or getattr(config, 'data_prefix', None),
        atomic_tags or getattr(config, 'atomic_tags', None),
    )


def diff(before, after, class_name=None, data_prefix=None, atomic_tags=None, config=None):
    """
    Compare two pieces of HTML and return the combined content with the
    differences wrapped in <ins> and <del> tags.

    `atomic_tags` is a comma separated list (``'head,script,style'``) or an
    iterable of tag names replacing the default atomic tags.
    """
    if before == after:
        logger.debug('Documents are identical, nothing to diff')
        return before

    config = _resolve_config(config, class_name, data_prefix, atomic_tags)
    before_tokens = tokenize(before, config.atomic_tags)
    after_tokens = tokenize(after, config.atomic_tags)
    operations = calculate_operations(before_tokens, after_tokens)
    return render_operations(before_tokens, after_tokens, operations, config=config)
