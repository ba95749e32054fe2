'''
Console reporting for the plugin and its collaborators. Nothing here is ever shown inside the
rendered document; failures only produce a diagnostic line (plus optional detail panels).
'''

from dataclasses import dataclass
import shutil
import traceback
from typing import List


RESET = '\033[0m'


def wrap(text, width):
    while text:
        newline_index = text.find('\n')
        if newline_index != -1 and newline_index <= width:
            yield text[:newline_index]
            text = text[newline_index + 1:]
        else:
            yield text[:width]
            text = text[width:]


@dataclass
class Details:
    title: str
    content: str


class Message:
    def __init__(self, location: str, msg: str, details_list: List[Details] = None):
        self._location = location
        self._msg = msg
        self._details_list = details_list if details_list is not None else []

    @property
    def msg(self) -> str:
        return self._msg

    def print(self):
        print(f'{self.LOCATION_COLOUR}{self.TAG}{self._location}:{RESET} {self.MSG_COLOUR}{self._msg}{RESET}')

        terminal_width = shutil.get_terminal_size(fallback = (80, 40)).columns
        inner_width = terminal_width - 6

        first = True
        for details in self._details_list:
            if first:
                print(f'  ┌─{"─" * inner_width}─┐')
                first = False
            else:
                print(f'  ├─{"─" * inner_width}─┤')

            for line in wrap(details.content.rstrip(), inner_width):
                print(f'  │ {line}{" " * (inner_width - len(line))} │')

        if not first:
            print(f'  └─{"─" * inner_width}─┘')


class ProgressMsg(Message):
    LOCATION_COLOUR = '\033[32m'
    MSG_COLOUR = ''
    TAG = ''

class WarningMsg(Message):
    LOCATION_COLOUR = '\033[33;1m'
    MSG_COLOUR = '\033[37;1m'
    TAG = '[!] '

class ErrorMsg(Message):
    LOCATION_COLOUR = '\033[31;1m'
    MSG_COLOUR = '\033[37;1m'
    TAG = '[!!] '



class Progress:
    def __init__(self, show_cache_hits = False):
        self._errors = []
        self._show_cache_hits = show_cache_hits


    def show(self, msg: Message):
        msg.print()
        if isinstance(msg, ErrorMsg):
            self._errors.append(msg)
        return msg


    def progress(self, location, *, msg, advice = None):
        details_list = []
        if advice:
            details_list.append(Details('Advice', advice))
        return self.show(ProgressMsg(location, msg, details_list))


    def cache_hit(self, location: str, *, resource: str = None):
        obj = ProgressMsg(location,
                          'Using cached value' + (f' for {resource}' if resource else ''))
        return self.show(obj) if self._show_cache_hits else obj


    def warning(self, location, *, msg, exception = None):
        if exception:
            msg = f'{msg}: {str(exception)} ({exception.__class__.__name__})'
        return self.show(WarningMsg(location, msg))


    def error(self, location, *, msg = None, exception = None, show_traceback = True,
              output = None):
        details_list = []
        if exception:
            msg = f'{msg}: {str(exception)} ({exception.__class__.__name__})' if msg else str(exception)
            if show_traceback:
                details_list.append(Details('Traceback', ''.join(traceback.format_exc())))

        elif not msg:
            msg = 'error'

        if output:
            details_list.append(Details('Output', output))

        return self.show(ErrorMsg(location, msg, details_list))


    def get_errors(self):
        return list(self._errors)


    def clear_errors(self):
        self._errors.clear()
