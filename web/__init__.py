"""web/ -- HTML routes and Jinja2 templates.

Layer rule: web/ imports auth/ and core/ (and the shared limiter), never api/main.
"""
