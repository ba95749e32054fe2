'''
Flips the hide flag of one `.base` reference, rewriting the document text.

The rewritten reference is always written in image form, with an explicit trailing flag:

```
![[lists/reading.base|Reading list]]  -->  ![Reading list|x](lists/reading.base)
![Reading list|x](lists/reading.base) -->  ![Reading list|o](lists/reading.base)
![x](lists/reading.base)              -->  ![reading|o](lists/reading.base)
```

Image-form references are searched first; embed-form ones only if no image-form reference has the
requested target. Only the first matching reference is rewritten.
'''

from __future__ import annotations
from .references import (Reference, image_references, embed_references, derive_name, flag_of,
                         normalize_target, HIDE_FLAG, SHOW_FLAG)

from dataclasses import dataclass


@dataclass(frozen = True)
class ToggleResult:
    text: str
    flag: str
    reference: Reference

    @property
    def hidden(self) -> bool:
        return self.flag == HIDE_FLAG


def rewrite(ref: Reference) -> tuple[str, str]:
    '''Returns the canonical replacement text for 'ref' and the new flag it carries.'''
    parts = list(ref.label_parts)
    current = flag_of(parts)
    if current is not None:
        parts.pop()

    new_flag = SHOW_FLAG if current == HIDE_FLAG else HIDE_FLAG
    name = '|'.join(parts) if parts else derive_name(ref.target)
    return f'![{name}|{new_flag}]({ref.target})', new_flag


def toggle_flag(text: str, target: str) -> ToggleResult | None:
    '''
    Toggles the first reference to 'target' in 'text'. Returns None if there is no such reference,
    or if rewriting it would not change the text; callers must not write anything back in that
    case.
    '''
    target = normalize_target(target)
    for scan in (image_references, embed_references):
        ref = next((r for r in scan(text) if r.target == target), None)
        if ref is not None:
            replacement, new_flag = rewrite(ref)
            new_text = text[:ref.start] + replacement + text[ref.end:]
            if new_text == text:
                return None
            return ToggleResult(text = new_text, flag = new_flag, reference = ref)

    return None
