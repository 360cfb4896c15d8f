from config.env import env

# Reject map_spread items whose length does not fit the callback's parameters
strict_spread = env('COLLECTION_STRICT_SPREAD', True)

# Log channel used for collection diagnostics
log_channel = env('COLLECTION_LOG_CHANNEL', 'collection')
