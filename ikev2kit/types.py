"""Protocol numbers and shared error type for IKEv2 messages."""

from enum import IntEnum


class MessageError(ValueError):
    """Raised when a payload cannot be encoded or decoded."""


class PayloadType(IntEnum):
    """IKEv2 payload type codes."""

    NO_NEXT = 0
    SA = 33
    KE = 34
    IDI = 35
    IDR = 36
    CERT = 37
    CERTREQ = 38
    AUTH = 39
    NINR = 40
    N = 41
    D = 42
    V = 43
    TSI = 44
    TSR = 45
    SK = 46
    CP = 47
    EAP = 48


class EAPType(IntEnum):
    """EAP method types used inside IKE."""

    IDENTITY = 1
    NOTIFICATION = 2
    NAK = 3
    EXPANDED = 254


class TransformType(IntEnum):
    """Transform types carried in a security association proposal."""

    ENCRYPTION_ALGORITHM = 1
    PSEUDORANDOM_FUNCTION = 2
    INTEGRITY_ALGORITHM = 3
    DIFFIE_HELLMAN_GROUP = 4
    EXTENDED_SEQUENCE_NUMBERS = 5


class ProtocolID(IntEnum):
    """Security protocol identifiers."""

    NONE = 0
    IKE = 1
    AH = 2
    ESP = 3


# EAP codes
EAP_CODE_REQUEST = 1
EAP_CODE_RESPONSE = 2
EAP_CODE_SUCCESS = 3
EAP_CODE_FAILURE = 4

# Transform attribute formats
ATTRIBUTE_FORMAT_USE_TLV = 0
ATTRIBUTE_FORMAT_USE_TV = 1

# Transform attribute types
ATTRIBUTE_TYPE_KEY_LENGTH = 14

# Encryption transform IDs
ENCR_DES_IV64 = 1
ENCR_DES = 2
ENCR_3DES = 3
ENCR_RC5 = 4
ENCR_IDEA = 5
ENCR_CAST = 6
ENCR_BLOWFISH = 7
ENCR_3IDEA = 8
ENCR_DES_IV32 = 9
ENCR_NULL = 11
ENCR_AES_CBC = 12
ENCR_AES_CTR = 13

# Pseudorandom function transform IDs
PRF_HMAC_MD5 = 1
PRF_HMAC_SHA1 = 2
PRF_HMAC_TIGER = 3
PRF_HMAC_SHA2_256 = 5

# Integrity transform IDs
AUTH_NONE = 0
AUTH_HMAC_MD5_96 = 1
AUTH_HMAC_SHA1_96 = 2
AUTH_DES_MAC = 3
AUTH_KPDK_MD5 = 4
AUTH_AES_XCBC_96 = 5
AUTH_HMAC_SHA2_256_128 = 12

# Diffie-Hellman group transform IDs
DH_NONE = 0
DH_768_BIT_MODP = 1
DH_1024_BIT_MODP = 2
DH_1536_BIT_MODP = 5
DH_2048_BIT_MODP = 14
DH_3072_BIT_MODP = 15
DH_4096_BIT_MODP = 16
DH_6144_BIT_MODP = 17
DH_8192_BIT_MODP = 18

# Extended sequence number transform IDs
ESN_DISABLE = 0
ESN_ENABLE = 1

# Traffic selector types
TS_IPV4_ADDR_RANGE = 7
TS_IPV6_ADDR_RANGE = 8

# Exchange types
IKE_SA_INIT = 34
IKE_AUTH = 35
CREATE_CHILD_SA = 36
INFORMATIONAL = 37

# Notify message types
UNSUPPORTED_CRITICAL_PAYLOAD = 1
INVALID_IKE_SPI = 4
INVALID_MAJOR_VERSION = 5
INVALID_SYNTAX = 7
INVALID_MESSAGE_ID = 9
INVALID_SPI = 11
NO_PROPOSAL_CHOSEN = 14
INVALID_KE_PAYLOAD = 17
AUTHENTICATION_FAILED = 24
SINGLE_PAIR_REQUIRED = 34
NO_ADDITIONAL_SAS = 35
INTERNAL_ADDRESS_FAILURE = 36
FAILED_CP_REQUIRED = 37
TS_UNACCEPTABLE = 38
INVALID_SELECTORS = 39
UNACCEPTABLE_ADDRESSES = 40
UNEXPECTED_NAT_DETECTED = 41
TEMPORARY_FAILURE = 43
CHILD_SA_NOT_FOUND = 44
INITIAL_CONTACT = 16384
SET_WINDOW_SIZE = 16385
ADDITIONAL_TS_POSSIBLE = 16386
IPCOMP_SUPPORTED = 16387
NAT_DETECTION_SOURCE_IP = 16388
NAT_DETECTION_DESTINATION_IP = 16389
COOKIE = 16390
USE_TRANSPORT_MODE = 16391
HTTP_CERT_LOOKUP_SUPPORTED = 16392
REKEY_SA = 16393
ESP_TFC_PADDING_NOT_SUPPORTED = 16394
NON_FIRST_FRAGMENTS_ALSO = 16395
MOBIKE_SUPPORTED = 16396
ADDITIONAL_IP4_ADDRESS = 16397
ADDITIONAL_IP6_ADDRESS = 16398
NO_ADDITIONAL_ADDRESSES = 16399
UPDATE_SA_ADDRESSES = 16400
COOKIE2 = 16401
NO_NATS_ALLOWED = 16402

# Certificate encodings
PKCS7_WRAPPED_X509_CERTIFICATE = 1
PGP_CERTIFICATE = 2
DNS_SIGNED_KEY = 3
X509_CERTIFICATE_SIGNATURE = 4
KERBEROS_TOKEN = 6
CERTIFICATE_REVOCATION_LIST = 7
AUTHORITY_REVOCATION_LIST = 8
SPKI_CERTIFICATE = 9
X509_CERTIFICATE_ATTRIBUTE = 10
HASH_AND_URL_OF_X509_CERTIFICATE = 12
HASH_AND_URL_OF_X509_BUNDLE = 13

# Identification types
ID_IPV4_ADDR = 1
ID_FQDN = 2
ID_RFC822_ADDR = 3
ID_IPV6_ADDR = 5
ID_DER_ASN1_DN = 9
ID_DER_ASN1_GN = 10
ID_KEY_ID = 11

# Authentication methods
RSA_DIGITAL_SIGNATURE = 1
SHARED_KEY_MESSAGE_INTEGRITY_CODE = 2
DSS_DIGITAL_SIGNATURE = 3

# Configuration types
CFG_REQUEST = 1
CFG_REPLY = 2
CFG_SET = 3
CFG_ACK = 4

# Configuration attribute types
INTERNAL_IP4_ADDRESS = 1
INTERNAL_IP4_NETMASK = 2
INTERNAL_IP4_DNS = 3
INTERNAL_IP4_NBNS = 4
INTERNAL_IP4_DHCP = 6
APPLICATION_VERSION = 7
INTERNAL_IP6_ADDRESS = 8
INTERNAL_IP6_DNS = 10
INTERNAL_IP6_DHCP = 12
INTERNAL_IP4_SUBNET = 13
SUPPORTED_ATTRIBUTES = 14
INTERNAL_IP6_SUBNET = 15

# IP protocol IDs used in traffic selectors
IP_PROTOCOL_ALL = 0
IP_PROTOCOL_ICMP = 1
IP_PROTOCOL_TCP = 6
IP_PROTOCOL_UDP = 17
IP_PROTOCOL_GRE = 47

# EAP-5G
VENDOR_ID_3GPP = 10415
VENDOR_TYPE_EAP5G = 3

EAP5G_TYPE_5G_START = 1
EAP5G_TYPE_5G_NAS = 2
EAP5G_TYPE_5G_STOP = 4

AN_PARAMETERS_TYPE_GUAMI = 1
AN_PARAMETERS_TYPE_SELECTED_PLMN_ID = 2
AN_PARAMETERS_TYPE_REQUESTED_NSSAI = 3
AN_PARAMETERS_TYPE_ESTABLISHMENT_CAUSE = 4

AN_PARAMETERS_LEN_GUAMI = 6
AN_PARAMETERS_LEN_PLMN_ID = 3
AN_PARAMETERS_LEN_EST_CAUSE = 1

ESTABLISHMENT_CAUSE_EMERGENCY = 0
ESTABLISHMENT_CAUSE_HIGH_PRIORITY_ACCESS = 1
ESTABLISHMENT_CAUSE_MO_SIGNALING = 3
ESTABLISHMENT_CAUSE_MO_DATA = 4
ESTABLISHMENT_CAUSE_MPS_PRIORITY_ACCESS = 8
ESTABLISHMENT_CAUSE_MCS_PRIORITY_ACCESS = 9

EAP5G_SPARE_VALUE = 0

# 3GPP notify message types
VENDOR_3GPP_NOTIFY_TYPE_5G_QOS_INFO = 55501
VENDOR_3GPP_NOTIFY_TYPE_NAS_IP4_ADDRESS = 55502
VENDOR_3GPP_NOTIFY_TYPE_UP_IP4_ADDRESS = 55504
VENDOR_3GPP_NOTIFY_TYPE_NAS_TCP_PORT = 55506

NOTIFY_TYPE_5G_QOS_INFO_BIT_DSCP_I_CHECK = 1 << 0
NOTIFY_TYPE_5G_QOS_INFO_BIT_DCS_I_CHECK = 1 << 1

# IKE roles
ROLE_INITIATOR = True
ROLE_RESPONDER = False