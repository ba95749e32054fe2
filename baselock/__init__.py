'''
# Bases Lock

Hides the toolbars of `.base` embeds in rendered markdown documents, according to a trailing
'|x' flag in the embed's label or alias, and flips that flag on request.

The parsing and rewriting logic lives in 'baselock.lib'; 'baselock.ext' holds the Python Markdown
extension that connects it to rendered HTML.
'''

from .lib.extractor import extract_hidden_targets
from .lib.toggle import toggle_flag, ToggleResult
from .lib.cache import HiddenTargetsCache
from .lib.plugin import BasesLockPlugin, RenderContext, ToggleRequest
