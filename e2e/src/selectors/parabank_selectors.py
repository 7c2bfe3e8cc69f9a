# e2e/src/selectors/parabank_selectors.py
# Referenced from scenarios yaml as $NAME

INDEX_PATH = "index.htm"

REGISTER_LINK = "a[href='register.htm']"
LOGOUT_LINK = "a[href='logout.htm']"

# registration form: ids contain dots, so attribute selectors instead of #customer\.firstName
REG_FIRST_NAME = "[id='customer.firstName']"
REG_LAST_NAME = "[id='customer.lastName']"
REG_STREET = "[id='customer.address.street']"
REG_CITY = "[id='customer.address.city']"
REG_STATE = "[id='customer.address.state']"
REG_ZIP = "[id='customer.address.zipCode']"
REG_PHONE = "[id='customer.phoneNumber']"
REG_SSN = "[id='customer.ssn']"
REG_USERNAME = "[id='customer.username']"
REG_PASSWORD = "[id='customer.password']"
REG_REPEATED_PASSWORD = "#repeatedPassword"
REG_SUBMIT = "input[value='Register']"

# left panel login form
LOGIN_USERNAME = "input[name='username']"
LOGIN_PASSWORD = "input[name='password']"
LOGIN_SUBMIT = "input[value='Log In']"

# post-action pages
PAGE_TITLE_HEADING = "h1.title"
STATUS_TEXT = "#rightPanel > p"
# left panel greets the customer by first and last name
WELCOME_TEXT = "#leftPanel p.smallText"
ERROR_TEXT = "#rightPanel p.error"

REGISTER_PAGE_TITLE = "Register for Free Online Account Access"
