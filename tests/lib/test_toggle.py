from baselock.lib.toggle import toggle_flag
from baselock.lib.references import Kind
from baselock.lib.extractor import extract_hidden_targets

import unittest
from hamcrest import *


class ToggleTestCase(unittest.TestCase):

    def test_image_form(self):
        for text,                              expected_text,                  expected_flag in [
            ('![notes|x](folder/a.base)',      '![notes|o](folder/a.base)',    'o'),
            ('![notes|X](folder/a.base)',      '![notes|o](folder/a.base)',    'o'),
            ('![notes|o](folder/a.base)',      '![notes|x](folder/a.base)',    'x'),
            ('![notes](folder/a.base)',        '![notes|x](folder/a.base)',    'x'),
            ('![ a | b |x](folder/a.base)',    '![a|b|o](folder/a.base)',      'o'),
            ('![x](folder/a.base)',            '![a|o](folder/a.base)',        'o'),
            ('![](folder/a.base)',             '![a|x](folder/a.base)',        'x'),
        ]:
            result = toggle_flag(text, 'folder/a.base')
            assert_that(result, has_properties(text = expected_text, flag = expected_flag),
                        text)


    def test_embed_form_normalised(self):
        result = toggle_flag('![[folder/b.base|view]]', 'folder/b.base')
        assert_that(result, has_properties(text = '![view|x](folder/b.base)',
                                           flag = 'x',
                                           hidden = True,
                                           reference = has_properties(kind = Kind.EMBED)))

        for text,                              expected_text in [
            ('![[folder/b.base|view|x]]',      '![view|o](folder/b.base)'),
            ('![[folder/b.base]]',             '![b|x](folder/b.base)'),
            ('![[folder/b.base|o]]',           '![b|x](folder/b.base)'),
        ]:
            assert_that(toggle_flag(text, 'folder/b.base'), has_property('text', expected_text))


    def test_name_derived_from_target(self):
        result = toggle_flag('![x](folder/c.base)', 'folder/c.base')
        assert_that(result, has_properties(text = '![c|o](folder/c.base)', flag = 'o'))


    def test_not_found(self):
        for text in [
            '',
            'No embeds here.',
            '![notes|x](folder/a.base)',
            '![[folder/a.base|x]]',
            '![notes](folder/z.png)',
        ]:
            assert_that(toggle_flag(text, 'folder/z.base'), none())


    def test_only_first_occurrence(self):
        text = '![a](other.base) ![b](t.base) ![c|x](t.base) ![[t.base|d]]'
        result = toggle_flag(text, 't.base')
        assert_that(result.text,
                    is_('![a](other.base) ![b|x](t.base) ![c|x](t.base) ![[t.base|d]]'))


    def test_image_form_takes_precedence(self):
        text = '![[t.base|first]]\n![second](t.base)'
        result = toggle_flag(text, 't.base')
        assert_that(result.text, is_('![[t.base|first]]\n![second|x](t.base)'))
        assert_that(result.reference, has_properties(kind = Kind.IMAGE))


    def test_surrounding_text_preserved(self):
        text = '# Title\n\nBefore ![[t.base|view]] after.\r\nMore.\n'
        result = toggle_flag(text, ' t.base ')
        assert_that(result.text, is_('# Title\n\nBefore ![view|x](t.base) after.\r\nMore.\n'))


    def test_alternates(self):
        text = '![[folder/b.base|view]]'
        flags = []
        for _ in range(5):
            result = toggle_flag(text, 'folder/b.base')
            text = result.text
            flags.append(result.flag)
            assert_that(extract_hidden_targets(text),
                        is_({'folder/b.base'} if result.hidden else set()))

        assert_that(flags, is_(['x', 'o', 'x', 'o', 'x']))
        assert_that(text, is_('![view|x](folder/b.base)'))
