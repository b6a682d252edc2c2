import argparse

from .constants import Namespace
from .util import cast_boolean, get_env_variable


class DEFAULTS(Namespace):
    """
    default settings. Each may be overridden by the environment variable of the same name
    with the ``BEDANNO_`` prefix (ex. ``BEDANNO_DATA_DIR``)

    Attributes:
        data_dir: directory holding the built-in reference annotations
        chunk_size: number of rows read from an input file at a time
        log_level: level of logging to output
        ignore_chr_prefix: treat chromosome names with and without the chr prefix as equal
    """

    data_dir: str = 'data'
    chunk_size: int = 10000
    log_level: str = 'INFO'
    ignore_chr_prefix: bool = False


def get_default(attr: str):
    """
    the default value for a setting, taking environment overrides into account

    Example:
        >>> get_default('chunk_size')
        10000
    """
    return get_env_variable(attr, getattr(DEFAULTS, attr))


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _format_args(self, action, default_metavar):
        if action.metavar is None:
            action.metavar = get_metavar(action.type)
        return super(CustomHelpFormatter, self)._format_args(action, default_metavar)

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(bool)
        '{True,False}'
    """
    if arg_type in [bool, cast_boolean]:
        return '{True,False}'
    elif arg_type == float:
        return 'FLOAT'
    elif arg_type == int:
        return 'INT'
    return None
