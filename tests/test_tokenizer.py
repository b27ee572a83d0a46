from __future__ import annotations

from markupdiff.config import DEFAULT_ATOMIC_TAGS
from markupdiff.tokenizer import create_token, key_for_token, tokenize


def _texts(markup: str, **kwargs) -> list[str]:
    return [t.text for t in tokenize(markup, **kwargs)]


def test_plain_text():
    assert len(tokenize('this is a test')) == 7


def test_html():
    assert len(tokenize('<p>this is a <strong>test</strong></p>')) == 11


def test_comments_are_removed():
    tokens = tokenize('<p> this is <!-- a comment! --> </p>')
    assert len(tokens) == 8
    assert not any('<!--' in t.text for t in tokens)


def test_unterminated_comment_is_dropped():
    assert _texts('a<!-- never closed') == ['a']


def test_contiguous_whitespace_is_one_token():
    assert tokenize('a   b') == [
        create_token('a', 0), create_token('   ', 1), create_token('b', 4)]


def test_single_spaces():
    assert _texts(' a b ') == [' ', 'a', ' ', 'b', ' ']


def test_self_closing_tags():
    assert _texts('<p>hello</br>goodbye</p>') == [
        '<p>', 'hello', '</br>', 'goodbye', '</p>']


def test_punctuation_is_split():
    assert _texts('Hi, there!') == ['Hi', ',', ' ', 'there', '!']


def test_unicode_letters_and_digits():
    assert _texts('café naïve 42nd') == ['café', ' ', 'naïve', ' ', '42nd']


def test_entities():
    assert _texts('a&nbsp;b&amp;c') == ['a', '&nbsp;', 'b', '&amp;', 'c']


def test_ampersand_without_entity():
    assert _texts('Tom & Jerry') == ['Tom', ' ', '&', ' ', 'Jerry']
    assert _texts('a &b<i>c</i>') == ['a', ' ', '&b', '<i>', 'c', '</i>']


def test_positions():
    tokens = tokenize('ab <i>c</i><!-- x --> d')
    assert [(t.text, t.pos) for t in tokens] == [
        ('ab', 0), (' ', 2), ('<i>', 3), ('c', 6), ('</i>', 7), (' ', 21), ('d', 22)]


def test_image_tags():
    assert _texts('<p><img src="1.jpg"><img src="2.jpg"></p>') == [
        '<p>', '<img src="1.jpg">', '<img src="2.jpg">', '</p>']


def test_iframe_is_atomic():
    assert _texts('<p><iframe src="sample.html"></iframe></p>') == [
        '<p>', '<iframe src="sample.html"></iframe>', '</p>']


def test_object_is_atomic():
    assert _texts('<p><object><param name="1" /><param name="2" /></object></p>') == [
        '<p>', '<object><param name="1" /><param name="2" /></object>', '</p>']


def test_math_is_atomic():
    math = ('<math xmlns="http://www.w3.org/1998/Math/MathML">'
            '<mi>&#x03C0;<!-- π --></mi>'
            '<mo>&#x2062;<!-- &InvisibleTimes; --></mo>'
            '<msup><mi>r</mi><mn>2</mn></msup></math>')
    assert _texts('<p>' + math + '</p>') == ['<p>', math, '</p>']


def test_svg_is_atomic():
    svg = ('<svg width="100" height="100">'
           '<circle cx="50" cy="50" r="40" stroke="green" stroke-width="4" fill="yellow" />'
           '</svg>')
    assert _texts('<p>' + svg + '</p>') == ['<p>', svg, '</p>']


def test_self_closing_atomic_tag():
    assert _texts('<svg/><p>x</p>') == ['<svg/>', '<p>', 'x', '</p>']


def test_script_is_atomic():
    assert _texts('<p><script>console.log("hi");</script></p>') == [
        '<p>', '<script>console.log("hi");</script>', '</p>']


def test_atomic_tag_names_need_a_boundary():
    # <header> must not be taken for an atomic <head>.
    assert _texts('<header>x</header>') == ['<header>', 'x', '</header>']


def test_anchor_is_atomic_only_when_configured():
    assert _texts('<a src="1">text</a>') == ['<a src="1">', 'text', '</a>']
    atomic = DEFAULT_ATOMIC_TAGS | {'a'}
    assert _texts('<a src="1">text</a>', atomic_tags=atomic) == ['<a src="1">text</a>']


def test_unterminated_markup_is_kept():
    assert _texts('a <b') == ['a', ' ', '<b']
    assert _texts('<script>x = 1') == ['<script>x = 1']


def test_tokens_rebuild_the_source():
    markup = '<div class="x">\n  <p>Hello,&nbsp;world &amp; co.</p><br/>\t<img src="a.png"></div>'
    assert ''.join(_texts(markup)) == markup


def test_tag_keys_ignore_attributes():
    assert key_for_token('<P CLASS="x">') == '<p>'
    assert key_for_token('</P>') == '</p>'
    assert key_for_token('<br/>') == '<br/>'


def test_media_keys():
    assert key_for_token('<img class="a" src="1.jpg" alt="x">') == '<img src="1.jpg">'
    assert key_for_token('<object type="x" data="movie.swf"><param></object>') == \
        '<object src="movie.swf"></object>'
    assert key_for_token('<iframe width="3" src="a.html"></iframe>') == \
        '<iframe src="a.html"></iframe>'


def test_svg_uuid_is_ignored():
    template = '<svg data-uuid="%s" width="1"><circle r="1"/></svg>'
    one = key_for_token(template % ('0' * 32))
    two = key_for_token(template % ('f' * 32))
    assert one == two
    assert 'data-uuid' not in one


def test_anchor_key():
    anchor = '<a href="x">link</a>'
    assert key_for_token(anchor) == '<a>'
    assert key_for_token(anchor, DEFAULT_ATOMIC_TAGS | {'a'}) == anchor


def test_text_key_collapses_whitespace():
    assert key_for_token(' \n\t') == ' '
    assert key_for_token('&nbsp;') == ' '
    assert key_for_token('&#160;') == ' '
    assert key_for_token('word') == 'word'
