CAMPUS_GATEWAY = "http://10.10.9.9"
GATEWAY_HOST = "10.10.9.9"
LOGIN_URL = "http://10.10.9.9/eportal/InterFace.do?method=login"
LOGIN_INDEX = "http://10.10.9.9/eportal/index.jsp"
ONLINE_INFO_URL = "http://10.10.9.9/eportal/InterFace.do?method=getOnlineUserInfo"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/79.0.3945.88 Safari/537.36"
)

# Public key used by the portal's login page script. Must not change.
PUBLIC_EXPONENT = "10001"
PUBLIC_MODULUS = (
    "94dd2a8675fb779e6b9f7103698634cd400f27a154afa67af6166a43fc26417222a79506"
    "d34cacc7641946abda1785b7acf9910ad6a0978c91ec84d40b71d2891379af19ffb333e7"
    "517e390bd26ac312fe940c340466b4a5d4af1d65c3b5944078f96a1a51a5a53e4bc30281"
    "8b7c9f63c4a1b07bd7d874cef1c3d4b2f5eb7871"
)

DEFAULT_CHECK_URL = "https://www.baidu.com"
DEFAULT_CHECK_TIMEOUT = 5
DEFAULT_CHECK_RETRIES = 5
DEFAULT_HTTP_TIMEOUT = 8
DEFAULT_CHECK_INTERVAL = 600
REQUIRED_USERNAME_LENGTH = 8

UNKNOWN_ADDRESS = "unknown"
