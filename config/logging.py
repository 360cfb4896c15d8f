from config.env import env

# Default log channel
default = env('LOG_CHANNEL', 'stderr')

channels = {
    'stack': {
        'driver': 'stack',
        'channels': ['stderr'],
    },
    
    'single': {
        'driver': 'single',
        'path': 'storage/logs/collection.log',
        'level': env('LOG_LEVEL', 'debug'),
    },
    
    'daily': {
        'driver': 'daily',
        'path': 'storage/logs/collection.log',
        'level': env('LOG_LEVEL', 'debug'),
        'days': 14,
    },
    
    'stderr': {
        'driver': 'stderr',
        'level': env('LOG_LEVEL', 'warning'),
        'formatter': 'laravel',
    },
    
    'json': {
        'driver': 'stderr',
        'level': env('LOG_LEVEL', 'warning'),
        'formatter': 'json',
    },
    
    'null': {
        'driver': 'null',
    },
    
    'collection': {
        'driver': 'stderr',
        'level': env('COLLECTION_LOG_LEVEL', 'warning'),
        'formatter': 'laravel',
    },
}
