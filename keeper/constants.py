# keeper/constants.py

from enum import Enum


class JobName(str, Enum):
    PROCESS_BATCH = "process-batch"
    UPDATE_BASE_URL = "update-base-url"
    UPLOAD_RESOURCE = "upload-resource"
