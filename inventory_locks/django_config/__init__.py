"""Django 工程配置 (settings / urls / wsgi)"""


def use_pymysql():
    """
    以 PyMySQL 充当 MySQLdb 驱动
    Django 要求 mysqlclient 2.2.1+，需在替换后修正版本号
    """
    import pymysql
    pymysql.install_as_MySQLdb()
    import MySQLdb
    if hasattr(MySQLdb, 'version_info') and MySQLdb.version_info < (2, 2, 1):
        setattr(MySQLdb, 'version_info', (2, 2, 1, 'final', 0))
        setattr(MySQLdb, '__version__', '2.2.1')
