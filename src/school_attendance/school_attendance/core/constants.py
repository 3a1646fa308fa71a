"""Constants and defaults.

Note: Keep constants here to avoid magic literals spread across code.
"""

DEFAULT_API_BASE_URL = "https://srkdp-production.up.railway.app"
DEFAULT_API_TIMEOUT = 15
API_PREFIX = "/api"

# Keys persisted in the Flask session (the client-side credential storage).
ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
USER_DATA_KEY = "user_data"
STATE_OWNER_KEY = "attendance_owner"

REQUIRED_IMPORT_HEADERS = ("rollNumber", "firstName", "lastName", "parentPhone")
OPTIONAL_IMPORT_HEADERS = ("fatherName", "motherName", "parentEmail", "address", "gender")
SAMPLE_IMPORT_HEADER = "rollNumber,firstName,lastName,fatherName,motherName,parentPhone,parentEmail,address,gender"
CSV_MIME_TYPE = "text/csv"

GENDER_CHOICES = ("Male", "Female", "Other")

REPORT_STUDENT_HEADER = "Roll Number,Student Name,Father Name,Mother Name,Phone Number,Email,Address,Gender"
REPORT_CLASS_HEADER = "Class,Total Students,Present,Absent,Attendance Rate"
