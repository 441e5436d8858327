# storefront/schemas/common.py

# Largest value an INTEGER column holds on every supported dialect.
# Ids and quantities above it are rejected as malformed input before
# they reach the database driver.
MAX_DB_INT = 2**31 - 1
