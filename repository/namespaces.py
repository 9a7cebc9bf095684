# repository/namespaces.py
from types import MappingProxyType
from typing import Final, Mapping
from config.settings import settings
from model.namespace import FolderMapping, Namespace
from util.enums import NamespaceCategory

ROOT: Final[str] = settings.KV_KEY_ROOT

KV: Final[str] = f"{ROOT}:kv"  # one key space per store id below this

BODIES_NAMESPACE: Final[str] = "email-bodies"


def _ns(human_name: str, store_id: str, category: NamespaceCategory) -> Namespace:
    return Namespace(human_name=human_name, store_id=store_id, category=category)


_SYSTEM = NamespaceCategory.SYSTEM
_COURTS = NamespaceCategory.COURTS
_CLAIMANTS = NamespaceCategory.CLAIMANTS
_GOVERNMENT = NamespaceCategory.GOVERNMENT
_COMPLAINTS = NamespaceCategory.COMPLAINTS

NAMESPACES: Final[tuple[Namespace, ...]] = (
    _ns("bridge-accounts", "BRIDGE_ACCOUNTS", _SYSTEM),
    _ns(BODIES_NAMESPACE, "EMAIL_BODIES", _SYSTEM),
    # Courts
    _ns("court-of-appeal", "KV_COURT_OF_APPEAL", _COURTS),
    _ns("chancery", "KV_CHANCERY", _COURTS),
    _ns("admin-court", "KV_ADMIN_COURT", _COURTS),
    _ns("kings-bench", "KV_KINGS_BENCH", _COURTS),
    _ns("supreme", "KV_SUPREME", _COURTS),
    _ns("clerkenwell", "KV_CLERKENWELL", _COURTS),
    _ns("central-london", "KV_CENTRAL_LONDON", _COURTS),
    # Claimants / Defendants
    _ns("liu", "KV_LIU", _CLAIMANTS),
    _ns("hk-law", "KV_HK_LAW", _CLAIMANTS),
    _ns("lessel", "KV_LESSEL", _CLAIMANTS),
    _ns("letting-agents", "KV_LETTING_AGENTS", _CLAIMANTS),
    _ns("barristers", "KV_BARRISTERS", _CLAIMANTS),
    # Government
    _ns("gld", "KV_GLD", _GOVERNMENT),
    _ns("us-state-dept", "KV_US_STATE_DEPT", _GOVERNMENT),
    _ns("estonia", "KV_ESTONIA", _GOVERNMENT),
    # Complaints
    _ns("hmcts", "KV_HMCTS", _COMPLAINTS),
    _ns("ico", "KV_ICO", _COMPLAINTS),
    _ns("phso", "KV_PHSO", _COMPLAINTS),
    _ns("bar-standards", "KV_BAR_STANDARDS", _COMPLAINTS),
    _ns("parliament", "KV_PARLIAMENT", _COMPLAINTS),
)

NAME_TO_STORE_ID: Final[Mapping[str, str]] = MappingProxyType(
    {ns.human_name: ns.store_id for ns in NAMESPACES}
)


def _folder(folder: str, store_id: str, human_name: str) -> tuple[str, FolderMapping]:
    return folder, FolderMapping(folder=folder, store_id=store_id, human_name=human_name)


# IMAP folder -> owning store. Several folders may share one store (labels).
FOLDER_MAP: Final[Mapping[str, FolderMapping]] = MappingProxyType(
    dict(
        [
            # Claimants
            _folder("INBOX/MobiCycle Estonia/Liu", "KV_LIU", "Liu Litigation"),
            _folder("INBOX/MobiCycle Estonia/HK Law", "KV_HK_LAW", "HK Law Defendants"),
            _folder("INBOX/MobiCycle Estonia/Lessel", "KV_LESSEL", "Lessel Property"),
            _folder(
                "INBOX/MobiCycle Estonia/Letting Agents",
                "KV_LETTING_AGENTS",
                "Rentify Letting Agents",
            ),
            # Labels
            _folder("Labels/HK Law", "KV_HK_LAW", "HK Law Defendants"),
            _folder("Labels/Liu", "KV_LIU", "Liu Litigation"),
            _folder("Labels/Veena", "KV_BARRISTERS", "Pro Bono Barristers"),
            # Government
            _folder("INBOX/Government/GLD", "KV_GLD", "Government Legal Department"),
            _folder(
                "INBOX/Government/US State Dept", "KV_US_STATE_DEPT", "US State Department"
            ),
            _folder("INBOX/Government/Estonia", "KV_ESTONIA", "Estonian Government"),
            # Courts
            _folder(
                "INBOX/Courts/Court of Appeal", "KV_COURT_OF_APPEAL", "Court of Appeal"
            ),
            _folder("INBOX/Courts/Chancery", "KV_CHANCERY", "Chancery Division"),
            _folder("INBOX/Courts/Admin Court", "KV_ADMIN_COURT", "Administrative Court"),
            _folder("INBOX/Courts/Kings Bench", "KV_KINGS_BENCH", "King's Bench Division"),
            _folder("INBOX/Courts/Supreme", "KV_SUPREME", "Supreme Court"),
            _folder(
                "INBOX/Courts/Clerkenwell", "KV_CLERKENWELL", "Clerkenwell County Court"
            ),
            _folder(
                "INBOX/Courts/Central London",
                "KV_CENTRAL_LONDON",
                "Central London County Court",
            ),
            # Complaints
            _folder("INBOX/Complaints/HMCTS", "KV_HMCTS", "HMCTS Complaints"),
            _folder("INBOX/Complaints/ICO", "KV_ICO", "ICO Complaints"),
            _folder("INBOX/Complaints/PHSO", "KV_PHSO", "PHSO Complaints"),
            _folder(
                "INBOX/Complaints/Bar Standards", "KV_BAR_STANDARDS", "Bar Standards Board"
            ),
            _folder(
                "INBOX/Complaints/Parliament", "KV_PARLIAMENT", "Parliamentary Complaints"
            ),
        ]
    )
)
