__title__ = "arithtree"
__version__ = "0.1.0"
__summary__ = "arithtree - parse, compute, print, and serialize arithmetic expression trees"
__uri__ = ""
__author__ = "arithtree contributors"
__email__ = ""
__license__ = "MIT"
