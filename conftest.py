pytest_plugins = ["armshift.test_utils.fixtures"]
