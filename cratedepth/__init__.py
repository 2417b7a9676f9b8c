from cratedepth.__version__ import __version__
