"""
This module provides helper functions for printing and general output.

The standard 3/4 bit colors are available as module attributes.

..code:: python

    output.fprint("Careful!", color=output.YELLOW)
"""

import shutil
import sys
import textwrap

BLACK = 30
RED = 31
GREEN = 32
YELLOW = 33
BLUE = 34
MAGENTA = 35
CYAN = 36
WHITE = 37
GREY = 37
BOLD = 1
FAINT = 2


def fprint(*args, color=None, bullet='', width=0, wrap_indent=0,
           sep=' ', file=sys.stdout, end='\n', flush=False):
    """Print with automatic wrapping, bullets, and other features. Also accepts
    all print() kwargs.

    :param args: Standard print function args
    :param int color: ANSI color code to print with.
    :param str bullet: Print the first line with this 'bullet' string, and the
        following lines indented to match.
    :param str sep: The standard print sep argument.
    :param file: Stream to print.
    :param int wrap_indent: Indent lines (after the first) this number of
        spaces for each paragraph.
    :param Union[int,None] width: Wrap the text to this width. If 0, find the
        terminal's width and wrap to that.
    :param str end: String appended after the last value (default \\n)
    :param bool flush: Whether to forcibly flush the stream.
"""

    args = [str(a) for a in args]
    if color is not None:
        print('\x1b[{}m'.format(color), end='', file=file)

    if width == 0:
        width = shutil.get_terminal_size().columns
        width = 80 if width == 0 else width

    wrap_indent = ' '*wrap_indent

    out_str = sep.join(args)
    if width is not None:
        paragraphs = []
        for paragraph in str.splitlines(out_str):
            lines = textwrap.wrap(paragraph, width=width,
                                  subsequent_indent=wrap_indent)
            lines = '\n'.join(lines)

            if bullet:
                lines = textwrap.indent(lines, bullet, lines.startswith)

            paragraphs.append(lines)
        print('\n'.join(paragraphs), file=file, end='')
    else:
        print(out_str, file=file, end='')

    if color is not None:
        print('\x1b[0m', file=file, end='')

    print(end, end='', file=file, flush=flush)


def print_function_help(outfile, registry, namespace: str = None,
                        width: int = 0):
    """Print the signature and description of each registered function,
    grouped by namespace.

    :param outfile: Where to print.
    :param buildfuncs.registry.FunctionRegistry registry:
    :param namespace: Only print this namespace.
    :param width: Wrap width (0 for the terminal width).
    """

    for ns_name in sorted(registry.namespaces()):
        if namespace is not None and ns_name != namespace:
            continue

        plugin = registry.get_set(ns_name)
        fprint(ns_name, color=BOLD, file=outfile, width=width)
        fprint(plugin.description, bullet='  ', file=outfile, width=width)

        for descriptor in registry.functions(ns_name):
            sig = descriptor.signature(plugin.arg_names(descriptor))
            if descriptor.deprecated:
                sig += ' [deprecated]'
            fprint(sig, bullet='  - ', wrap_indent=4, file=outfile,
                   width=width)
            if descriptor.description:
                fprint(descriptor.description, bullet='      ',
                       file=outfile, width=width)

        fprint(file=outfile, width=width)
