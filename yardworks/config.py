import os


def _flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


class BaseConfig:
    SECRET_KEY = os.getenv('SECRET_KEY', 'change-me')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///yardworks.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = False

    # 'memory' keeps records for the life of the process, 'sql' uses SQLAlchemy
    STORE_BACKEND = os.getenv('STORE_BACKEND', 'memory')
    SEED_SAMPLE_DATA = _flag('SEED_SAMPLE_DATA')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    QUOTE_NUMBER_PREFIX = 'QT'
    QUOTE_VALIDITY_DAYS = int(os.getenv('QUOTE_VALIDITY_DAYS', '30'))
    TAX_RATE = os.getenv('TAX_RATE', '0.0825')

    COMPANY_NAME = os.getenv('COMPANY_NAME', 'Clean Cut Yard Works')
    COMPANY_TAGLINE = 'Professional Landscaping Services'
    COMPANY_ADDRESS = os.getenv('COMPANY_ADDRESS', '123 Garden Street, Green Valley, CA 90210')
    COMPANY_PHONE = os.getenv('COMPANY_PHONE', '(555) 123-4567')


class DevConfig(BaseConfig):
    DEBUG = True
    ENV = 'development'


class TestConfig(BaseConfig):
    TESTING = True
    ENV = 'testing'
    STORE_BACKEND = 'memory'
    SEED_SAMPLE_DATA = False
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'


class ProdConfig(BaseConfig):
    DEBUG = False
    ENV = 'production'
    SESSION_COOKIE_SECURE = True


CONFIGS = {
    'development': DevConfig,
    'testing': TestConfig,
    'production': ProdConfig,
}
