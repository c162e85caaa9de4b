from .base import *

DEBUG = True
ALLOWED_HOSTS = ['localhost', '127.0.0.1']

LOGGING['handlers']['console']['formatter'] = 'simple'
LOGGING['loggers']['registry']['level'] = 'DEBUG'
