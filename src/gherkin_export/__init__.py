from importlib.metadata import version, PackageNotFoundError


try:
    __version__ = version('gherkin-export')
except PackageNotFoundError:
    __version__ = 'unknown'
