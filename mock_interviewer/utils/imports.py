"""
Helpers for loading noisy third-party models.
"""
import os
import sys
import warnings


def import_quietly(func):
    """
    Run a function while suppressing Python warnings and stderr output.
    Model loaders print download progress and deprecation notices there.
    """
    original_stderr = sys.stderr
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            with open(os.devnull, 'w') as devnull:
                sys.stderr = devnull
                return func()
    finally:
        sys.stderr = original_stderr
