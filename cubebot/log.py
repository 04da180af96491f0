import logging

LOGGER = logging.getLogger("cubebot")
