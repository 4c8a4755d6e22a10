# core/constants.py
WORKER = 'worker'
EMPLOYER = 'employer'

USER_TYPE_CHOICES = (
    (WORKER, 'Worker'),
    (EMPLOYER, 'Employer'),
)

PART_TIME = 'part-time'
FULL_TIME = 'full-time'

AVAILABILITY_TYPE_CHOICES = (
    (PART_TIME, 'Part-time'),
    (FULL_TIME, 'Full-time'),
)

# (code, name, flag)
COUNTRIES = (
    ('PH', 'Philippines', '🇵🇭'),
    ('IN', 'India', '🇮🇳'),
    ('PK', 'Pakistan', '🇵🇰'),
    ('BD', 'Bangladesh', '🇧🇩'),
    ('VN', 'Vietnam', '🇻🇳'),
    ('ID', 'Indonesia', '🇮🇩'),
    ('NG', 'Nigeria', '🇳🇬'),
    ('KE', 'Kenya', '🇰🇪'),
    ('UA', 'Ukraine', '🇺🇦'),
    ('BR', 'Brazil', '🇧🇷'),
    ('MX', 'Mexico', '🇲🇽'),
    ('CO', 'Colombia', '🇨🇴'),
)

COUNTRY_CHOICES = tuple((code, name) for code, name, _ in COUNTRIES)

SKILLS = (
    'Virtual Assistant', 'Data Entry', 'Customer Service', 'Social Media',
    'Content Writing', 'Graphic Design', 'Web Development', 'SEO',
    'Bookkeeping', 'Email Marketing', 'Video Editing', 'Transcription',
    'Research', 'Lead Generation', 'WordPress', 'Shopify',
    'Excel', 'PowerPoint', 'Administrative', 'Project Management',
)

# Hourly rates are filtered on a 0-10 USD scale in half-dollar steps.
RATE_SCALE_MIN = 0
RATE_SCALE_MAX = 10
RATE_STEP = '0.5'
HOURS_SCALE_MIN = 0
HOURS_SCALE_MAX = 12

LAST_ACTIVE_ANY = 'any'
LAST_ACTIVE_TODAY = 'today'
LAST_ACTIVE_WEEK = 'week'
LAST_ACTIVE_MONTH = 'month'

LAST_ACTIVE_CHOICES = (
    (LAST_ACTIVE_ANY, 'Any time'),
    (LAST_ACTIVE_TODAY, 'Today'),
    (LAST_ACTIVE_WEEK, 'This week'),
    (LAST_ACTIVE_MONTH, 'This month'),
)

JOB_SORT_NEWEST = 'newest'
JOB_SORT_RATE_HIGH = 'rate-high'
JOB_SORT_RATE_LOW = 'rate-low'

JOB_SORT_CHOICES = (
    (JOB_SORT_NEWEST, 'Newest'),
    (JOB_SORT_RATE_HIGH, 'Highest rate'),
    (JOB_SORT_RATE_LOW, 'Lowest rate'),
)


def country_name(code):
    return next((name for c, name, _ in COUNTRIES if c == code), '')


def country_flag(code):
    return next((flag for c, _, flag in COUNTRIES if c == code), '🌍')
