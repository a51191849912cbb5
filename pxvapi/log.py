import logging
import sys


#---------------------------------------------------------------------------#
#   Package logger                                                          #
#       Importing pxvapi attaches no handler; applications opt in with      #
#       the helpers below or configure "Pixiv" themselves.                  #
#---------------------------------------------------------------------------#


_logstrfmt = "{asctime}|{name}|{levelname:^7s}| {message}"
_logtimefmt = "%H:%M:%S"
_filetimefmt = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOGFILE = "./pixiv.log"

_pxvroot = logging.getLogger("Pixiv")
_pxvroot.addHandler(logging.NullHandler())

pxlog = _pxvroot    #   Alias


def enable_console_logging(level=logging.INFO, stream=None):
    """
    Attach a console handler to the "Pixiv" logger.

    Args:
        level       int
            Level set on both the logger and the handler.
        stream      file-like
            Defaults to sys.stdout.

    Returns:
        The attached `logging.StreamHandler`, so it can be removed with
        `pxlog.removeHandler`.
    """
    hdl = logging.StreamHandler(stream or sys.stdout)
    hdl.setFormatter(logging.Formatter(_logstrfmt, _logtimefmt, "{"))
    return _attach(hdl, level)

def enable_file_logging(path=DEFAULT_LOGFILE, level=logging.INFO):
    """
    Attach an appending utf-8 file handler to the "Pixiv" logger.

    Returns:
        The attached `logging.FileHandler`.
    """
    hdl = logging.FileHandler(path, "a+", "utf-8")
    hdl.setFormatter(logging.Formatter(_logstrfmt, _filetimefmt, "{"))
    return _attach(hdl, level)

def _attach(hdl, level):
    hdl.setLevel(level)
    #   Logger level must not mask a more verbose handler.
    if _pxvroot.level == logging.NOTSET or level < _pxvroot.level:
        _pxvroot.setLevel(level)
    _pxvroot.addHandler(hdl)
    return hdl
