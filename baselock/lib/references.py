'''
Recognises the two ways a markdown document can embed a `.base` resource:

```
![Reading list|x](lists/reading.base)       <- 'image' form; flag is the last part of the label
![[lists/reading.base|Reading list|x]]      <- 'embed' form; flag is the last part of the alias
```

The label (or alias) is split on '|'. If its last non-empty part is 'x' (case-insensitive), the
embed's toolbar is hidden; 'o' or anything else means it is shown. Only targets ending in exactly
'.base' are considered.
'''

from __future__ import annotations

from dataclasses import dataclass
import enum
import re
from typing import Iterator


RESOURCE_SUFFIX = '.base'
DOCUMENT_EXTENSION = 'md'
HIDE_FLAG = 'x'
SHOW_FLAG = 'o'

_SUFFIX = re.escape(RESOURCE_SUFFIX)

IMAGE_REGEX = re.compile(rf'''(?x)
    !\[ (?P<label> [^\]]*? ) \]            # ![label]
    \( (?P<target> [^)\s]+ {_SUFFIX} ) \)  # (target.base)
''')

EMBED_REGEX = re.compile(rf'''(?x)
    !\[\[
    (?P<target> [^\]|]+ {_SUFFIX} )        # Target, up to the first '|'
    ( \| (?P<alias> [^\]]* ) )?            # Optional alias, which may itself contain '|'
    \]\]
''')


class Kind(enum.Enum):
    IMAGE = 'image'
    EMBED = 'embed'


@dataclass(frozen = True)
class Reference:
    kind: Kind
    target: str
    label_parts: tuple[str, ...]
    start: int
    end: int
    has_alias: bool = True

    @property
    def hidden(self) -> bool:
        # An embed-form reference needs an alias to carry a flag at all.
        return self.has_alias and flag_of(self.label_parts) == HIDE_FLAG


def normalize_target(target: str) -> str:
    return target.strip()


def split_label(label: str | None) -> tuple[str, ...]:
    return tuple(part for part in (p.strip() for p in (label or '').split('|')) if part)


def flag_of(parts) -> str | None:
    '''Returns 'x' or 'o' if the last part is one of those (in either case), or None.'''
    if parts:
        last = parts[-1].lower()
        if last in (HIDE_FLAG, SHOW_FLAG):
            return last
    return None


def has_hide_flag(label: str) -> bool:
    return flag_of(split_label(label)) == HIDE_FLAG


def image_references(text: str) -> Iterator[Reference]:
    for match in IMAGE_REGEX.finditer(text):
        yield Reference(kind = Kind.IMAGE,
                        target = normalize_target(match.group('target')),
                        label_parts = split_label(match.group('label')),
                        start = match.start(),
                        end = match.end())


def embed_references(text: str) -> Iterator[Reference]:
    for match in EMBED_REGEX.finditer(text):
        alias = match.group('alias')
        yield Reference(kind = Kind.EMBED,
                        target = normalize_target(match.group('target')),
                        label_parts = split_label(alias),
                        start = match.start(),
                        end = match.end(),
                        has_alias = bool(alias))


def derive_name(target: str) -> str:
    '''
    Makes a readable name out of a target path, for when a label has nothing left in it but the
    flag: 'lists/reading.base?x#y' becomes 'reading'.
    '''
    path = target.split('?')[0].split('#')[0]
    last = path.split('/')[-1]
    dot_index = last.rfind('.')
    if dot_index > 0:
        return last[:dot_index]
    return last or target
