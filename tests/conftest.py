pytest_plugins = [
    "tests.fixtures.db_client",
    "tests.fixtures.aws_fixtures",
    "tests.fixtures.app_fixtures",
]
