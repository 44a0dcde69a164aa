"""
gitbrowse - terminal based git commit browser
"""
__version__ = '0.1.0'
