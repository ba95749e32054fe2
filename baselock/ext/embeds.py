'''
# Embeds Extension

Connects the bases-lock plugin to Python Markdown. This does two things:

1. It renders `![[path/to/file.base|Alias]]` embeds (which Python Markdown does not otherwise
   understand) as `<span class="internal-embed" src="path/to/file.base" alt="Alias">`.
   (`![Alias](path/to/file.base)` is an ordinary markdown image, and needs no help.)

2. Once the HTML is complete, it hands it over to the plugin as a rendered fragment of the
   document, so that hidden embeds can be marked and every embed given its lock button.

## Example

```
markdown.markdown(text, extensions = [EmbedsExtension(plugin = plugin,
                                                      source_path = 'notes/reading.md')])
```

Without a 'plugin', only the first part happens.
'''

from baselock.lib.plugin import BasesLockPlugin, RenderContext
from baselock.lib.progress import Progress
from baselock.lib.references import EMBED_REGEX, normalize_target
import markdown
from markdown.inlinepatterns import InlineProcessor
from markdown.postprocessors import Postprocessor
import lxml.html

import html
from xml.etree import ElementTree

NAME = 'baselock.embeds'  # For error messages


class EmbedInlineProcessor(InlineProcessor):
    def __init__(self, md):
        super().__init__(EMBED_REGEX.pattern, md)

    def handleMatch(self, match, data):
        target = normalize_target(match.group('target'))
        alias = match.group('alias')

        element = ElementTree.Element('span')
        element.set('class', 'internal-embed')
        element.set('src', target)
        if alias is not None:
            element.set('alt', alias)
        element.text = markdown.util.AtomicString(alias or target)
        return element, match.start(0), match.end(0)


class FragmentPostprocessor(Postprocessor):
    def __init__(self, md, plugin: BasesLockPlugin, context: RenderContext, progress: Progress):
        super().__init__(md)
        self._plugin = plugin
        self._context = context
        self._progress = progress

    def run(self, text):
        if not text.strip():
            return text

        try:
            root = lxml.html.fragment_fromstring(text, create_parent = 'div')
        except Exception as e:  # lxml raises a variety of exceptions on malformed input.
            self._progress.error(NAME, msg = 'Cannot parse rendered HTML', exception = e)
            return text

        if not self._plugin.process_fragment(root, self._context):
            # Nothing was changed, so keep the original serialisation.
            return text

        return (html.escape(root.text or '', quote = False) +
                ''.join(lxml.html.tostring(child, encoding = 'unicode') for child in root))


class EmbedsExtension(markdown.Extension):
    def __init__(self, **kwargs):
        self.config = {
            'plugin': [
                '',
                'The BasesLockPlugin that rendered .base embeds are handed to. If not given, '
                'embeds are rendered but not marked.'
            ],
            'source_path': [
                '',
                'Path (as understood by the plugin\'s host) of the document being rendered.'
            ],
            'doc_id': [
                '',
                'Identifier of the render context, if the host has one.'
            ],
            'progress': [
                '',
                'An object accepting progress messages; by default, the plugin\'s own.'
            ],
        }
        super().__init__(**kwargs)


    def extendMarkdown(self, md):
        # Must run before Python Markdown's own image patterns (priority 150), which would
        # otherwise consume the leading '!['.
        md.inlinePatterns.register(EmbedInlineProcessor(md), 'baselock-embed', 175)

        plugin = self.getConfig('plugin')
        if not plugin:
            return

        if not isinstance(plugin, BasesLockPlugin):
            raise ValueError(f'"plugin" should be a BasesLockPlugin; was {type(plugin)}')

        source_path = self.getConfig('source_path')
        if not source_path:
            raise ValueError('"source_path" is required when a plugin is given')

        context = RenderContext(source_path, self.getConfig('doc_id') or None)
        progress = self.getConfig('progress') or plugin.progress

        # Must run after the raw HTML postprocessor (priority 30), so that the fragment is
        # complete.
        md.postprocessors.register(
            FragmentPostprocessor(md, plugin, context, progress), 'baselock-fragment', 5)



def makeExtension(**kwargs):
    return EmbedsExtension(**kwargs)
