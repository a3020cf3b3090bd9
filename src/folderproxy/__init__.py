"""folderproxy -- open local folders in the file manager from a web page.

This package implements a small HTTP gateway bound to localhost. A link
on a web page (``http://localhost:4455/open?name=subDir&token=...``) asks
the gateway to reveal a directory below a configured base path in the
host's native file manager. Auxiliary endpoints render status badges and
CSS snippets so the page can show whether a link is usable.
"""

__version__ = "0.1.0"
