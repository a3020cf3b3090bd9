"""HTTP gateway for folderproxy.

Validates requests coming from a web page (token, path shape) and turns
them into file-manager launches, status badges or CSS snippets.
"""
