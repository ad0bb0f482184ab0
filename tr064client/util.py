import logging


def _getLogger(name):
    """
    Retrieve a logger below the package's "tr064client" logger, so that
    applications can configure all of the library's logging in one place.
    """
    return logging.getLogger("tr064client.%s" % name)
