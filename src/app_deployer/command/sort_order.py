"""Default sort orders for the built-in commands.

Databases are created before the forests that attach to them; the combined
request is submitted after every command that may contribute to it.
"""

DEPLOY_DATABASES = 120
DEPLOY_FORESTS = 150
SUBMIT_COMBINED_REQUEST = 200
