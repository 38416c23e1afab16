import logging
import os


def configure_logging(log_file_path, log_level, append_to_log=False):
    loglevel = getattr(logging, log_level.upper())
    if log_file_path is None:
        logging.basicConfig(level=loglevel)
        return
    if not append_to_log:
        if os.path.exists(log_file_path):
            os.remove(log_file_path)
    logging.basicConfig(filename=log_file_path, level=loglevel)
