'''
Operations on rendered `.base` embeds: finding them in an HTML fragment, marking them hidden or
shown, and giving each one a lock/unlock button.

Fragments are lxml.html trees. Embeds rendered by the host as <div>/<span> elements get the
button as their last child; <img> embeds cannot have children, so theirs goes right after them.
'''

from __future__ import annotations
from .references import normalize_target, HIDE_FLAG, SHOW_FLAG

import lxml.etree
import lxml.html
from lxml.cssselect import CSSSelector

from typing import Iterator, Tuple


EMBED_SELECTOR = ('div.internal-embed[src$=".base"],'
                  'span.internal-embed[src$=".base"],'
                  'img[src$=".base"]')

HIDDEN_CLASS = 'bases-toolbar-hidden'
CONTAINER_CLASS = 'bases-lock-container'
TOGGLE_CLASS = 'bases-lock-toggle'

LOCKED_ICON = '🔒'
UNLOCKED_ICON = '🔓'

_select_embeds = CSSSelector(EMBED_SELECTOR, translator = 'html')


def embed_source(embed: lxml.html.HtmlElement) -> str:
    return embed.get('src') or embed.get('data-src') or ''


def find_embeds(fragment: lxml.html.HtmlElement) -> Iterator[Tuple[lxml.html.HtmlElement, str]]:
    '''Yields each `.base` embed in the fragment (including the root itself) and its target.'''
    for embed in _select_embeds(fragment):
        src = embed_source(embed)
        if src:
            yield embed, normalize_target(src)


def toggle_button(embed: lxml.html.HtmlElement) -> lxml.html.HtmlElement | None:
    if embed.tag == 'img':
        sibling = embed.getnext()
        if sibling is not None and sibling.tag == 'button' and TOGGLE_CLASS in sibling.classes:
            return sibling
        return None

    buttons = embed.find_class(TOGGLE_CLASS)
    return buttons[0] if buttons else None


def attach_toggle(embed: lxml.html.HtmlElement, target: str) -> lxml.html.HtmlElement:
    '''
    Gives 'embed' its lock button, unless it already has one (fragments may be processed more
    than once). Its icon and 'data-flag' are set by show_state().
    '''
    embed.classes.add(CONTAINER_CLASS)

    button = toggle_button(embed)
    if button is not None:
        return button

    button = lxml.html.Element('button', {'class': TOGGLE_CLASS,
                                          'type': 'button',
                                          'data-target': target})
    if embed.tag == 'img':
        button.tail = embed.tail
        embed.tail = None
        embed.addnext(button)
    else:
        embed.append(button)

    return button


def show_state(embed: lxml.html.HtmlElement, hidden: bool):
    '''Marks the embed as hidden or shown, and makes its button (if any) agree.'''
    if hidden:
        embed.classes.add(HIDDEN_CLASS)
    else:
        embed.classes.discard(HIDDEN_CLASS)

    button = toggle_button(embed)
    if button is not None:
        button.text = LOCKED_ICON if hidden else UNLOCKED_ICON
        button.set('data-flag', HIDE_FLAG if hidden else SHOW_FLAG)
