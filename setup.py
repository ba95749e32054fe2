import os
from setuptools import setup

def read(fname):
    return open(os.path.join(os.path.dirname(__file__), fname)).read()

setup(
    name = 'baselock',
    version = '0.1',
    description = 'Hides and shows the toolbars of .base embeds in markdown documents, via a trailing |x / |o flag.',
    long_description = read('README.md'),
    long_description_content_type = 'text/markdown',
    license = 'MIT',
    keywords = 'markdown',
    install_requires=[
        'markdown', 'lxml', 'cssselect'
    ],
    extras_require = {
        'test': ['PyHamcrest'],
    },
    packages = [
        'baselock', 'baselock.lib', 'baselock.ext'
    ],
    entry_points = {
        'markdown.extensions': [
            'baselock.embeds = baselock.ext.embeds:EmbedsExtension',
        ]
    },
    classifiers = [
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Text Processing :: Markup :: Markdown',
    ]
)
