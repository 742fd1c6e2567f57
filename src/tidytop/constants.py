APP_NAME = "tidytop"
ENV_PREFIX = "TIDYTOP_CONFIG__"
