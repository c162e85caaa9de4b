from .base import *

SECRET_KEY = 'test-secret-key'
REGISTRY_CREDENTIAL_SECRET = 'test-credential-secret'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Row-locking tests need a real database server; point DATABASE_NAME at a
# Postgres database to run them.
if os.getenv('DATABASE_NAME'):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.getenv('DATABASE_NAME'),
            'USER': os.getenv('DATABASE_USER', ''),
            'PASSWORD': os.getenv('DATABASE_PASSWORD', ''),
            'HOST': os.getenv('DATABASE_HOST', 'localhost'),
            'PORT': os.getenv('DATABASE_PORT', '5432'),
        }
    }

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REGISTRY_ORGANIZER = {
    'name': 'Test Organizers',
    'email': 'organizers@example.com',
    'phone': '+1 555 0100',
    'address': 'Main Hall',
}

LOGGING['root']['level'] = 'WARNING'
LOGGING['loggers']['registry']['level'] = 'WARNING'
