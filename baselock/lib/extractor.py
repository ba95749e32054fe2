'''
Finds which `.base` targets a document asks to hide.
'''

from .references import image_references, embed_references

from typing import Set


def extract_hidden_targets(source: str) -> Set[str]:
    '''
    Returns the targets of all image- and embed-form references in 'source' that carry the 'x'
    flag. A target is hidden if _any_ of its references is flagged; other unflagged references to
    the same target do not cancel it out.
    '''
    hidden = set()
    for scan in (image_references, embed_references):
        hidden.update(ref.target for ref in scan(source) if ref.hidden)
    return hidden
