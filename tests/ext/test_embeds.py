from ..util.hamcrest_elements import space, is_element
from ..util.mock_host import MockHost
from ..util.mock_progress import MockProgress
from baselock.lib import embeds
from baselock.lib.plugin import BasesLockPlugin
import baselock.ext.embeds

import unittest
from hamcrest import *

import markdown
import lxml.html

from textwrap import dedent


class EmbedsExtensionTestCase(unittest.TestCase):

    def run_markdown(self, markdown_text, **kwargs):
        md = markdown.Markdown(
            extensions = [baselock.ext.embeds.makeExtension(**kwargs)]
        )
        return md.convert(dedent(markdown_text).strip())


    def make_plugin(self, text):
        self.host = MockHost({'notes/home.md': text})
        self.progress = MockProgress()
        return BasesLockPlugin(self.host, self.progress)


    def test_embed_syntax(self):
        html = self.run_markdown(
            r'''
            ![[folder/b.base|view|x]]

            Inline ![[folder/c.base]] embed.
            ''')

        assert_that(
            lxml.html.fromstring(html),
            contains_exactly(
                is_element('p', {}, None,
                    is_element('span', {'class': 'internal-embed',
                                        'src': 'folder/b.base',
                                        'alt': 'view|x'}, 'view|x')),
                is_element('p', {}, 'Inline ',
                    is_element('span', {'class': 'internal-embed',
                                        'src': 'folder/c.base'}, 'folder/c.base',
                               tail = ' embed.')),
            ))


    def test_other_embeds_untouched(self):
        html = self.run_markdown('![[note.md|x]] ![pic](photo.png)')
        assert_that(html, contains_string('![[note.md|x]]'))
        assert_that(lxml.html.fromstring(html).find('.//img').attrib,
                    has_entries({'src': 'photo.png', 'alt': 'pic'}))


    def test_fragment_marked(self):
        text = '![Active|x](bases/active.base)\n\n![[bases/people.base|People]]'
        plugin = self.make_plugin(text)

        html = self.run_markdown(text, plugin = plugin, source_path = 'notes/home.md')

        root = lxml.html.fromstring(html)
        img = root.find('.//img')
        span = root.find('.//span')

        assert_that(img.get('class').split(),
                    contains_inanyorder(embeds.CONTAINER_CLASS, embeds.HIDDEN_CLASS))
        assert_that(img.getnext(), is_element('button', {'class': embeds.TOGGLE_CLASS,
                                                         'data-target': 'bases/active.base',
                                                         'data-flag': 'x'},
                                              embeds.LOCKED_ICON))
        assert_that(span.get('class').split(),
                    contains_inanyorder('internal-embed', embeds.CONTAINER_CLASS))
        assert_that(span[0], is_element('button', {'data-target': 'bases/people.base',
                                                   'data-flag': 'o'},
                                        embeds.UNLOCKED_ICON))
        assert_that(self.host.cached_reads, is_(['notes/home.md']))


    def test_doc_id(self):
        text = '![a|x](a.base)'
        plugin = self.make_plugin(text)

        self.run_markdown(text, plugin = plugin, source_path = 'notes/home.md', doc_id = 'd1')
        assert_that('d1', is_in(plugin.cache))
        assert_that('notes/home.md', is_not(is_in(plugin.cache)))


    def test_no_embeds_keeps_output(self):
        text = '# Title\n\nSome *text* &amp; <br/> more.'
        plugin = self.make_plugin(text)

        assert_that(self.run_markdown(text, plugin = plugin, source_path = 'notes/home.md'),
                    is_(self.run_markdown(text)))


    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            self.run_markdown('text', plugin = object(), source_path = 'notes/home.md')

        with self.assertRaises(ValueError):
            self.run_markdown('text', plugin = self.make_plugin('text'))


    def test_progress_override(self):
        plugin = self.make_plugin('text')
        progress = MockProgress(expect_error = True)
        ext = baselock.ext.embeds.makeExtension(plugin = plugin,
                                                source_path = 'notes/home.md',
                                                progress = progress)
        assert_that(ext.getConfig('progress'), same_instance(progress))
        assert_that(ext.getConfig('plugin'), same_instance(plugin))
