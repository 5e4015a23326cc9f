"""Rule-based legal FAQ chatbot for Indian law"""
import re
from dataclasses import dataclass


@dataclass(frozen=True)
class ChatbotReply:
    text: str
    topic: str


class LegalChatbot:
    """Keyword and regex lookup over a small legal knowledge base.

    - Statute sections: "section N" plus a code name (IPC, CrPC, CPC)
    - FAQ phrases, longest matching phrase wins
    - Topic keywords (bail, FIR, tenancy)
    - Otherwise a general reply
    """

    SECTIONS: dict[str, dict[str, str]] = {
        "ipc": {
            "302": "Section 302 of IPC deals with punishment for murder. If convicted, the punishment is "
                   "death or imprisonment for life and fine.",
            "376": "Section 376 of IPC deals with punishment for rape. It includes imprisonment not less "
                   "than 7 years which may extend to life and fine.",
            "420": "Section 420 of IPC deals with cheating and dishonestly inducing delivery of property. "
                   "The punishment is imprisonment up to 7 years and fine.",
            "124a": "Section 124A of IPC deals with sedition. The punishment is imprisonment for life with "
                    "fine, or imprisonment up to 3 years with fine.",
            "304b": "Section 304B of IPC deals with dowry death. The minimum punishment is 7 years "
                    "imprisonment which may extend to life imprisonment.",
            "498a": "Section 498A of IPC deals with husband or relative of husband subjecting a woman to "
                    "cruelty. Punishment is imprisonment up to 3 years and fine.",
        },
        "crpc": {
            "41": "Section 41 of CrPC deals with when police may arrest without warrant.",
            "125": "Section 125 of CrPC deals with order for maintenance of wives, children and parents.",
            "144": "Section 144 of CrPC deals with power to issue order in urgent cases of nuisance or "
                   "apprehended danger.",
            "161": "Section 161 of CrPC deals with examination of witnesses by police.",
        },
        "cpc": {
            "9": "Section 9 of CPC deals with courts to try all civil suits unless barred.",
            "11": "Section 11 of CPC deals with res judicata, meaning no court shall try any suit in which "
                  "the matter has been directly and substantially in issue in a former suit.",
        },
    }

    FAQS: dict[str, str] = {
        "rights when arrested": "When arrested in India, you have the right to: 1) Know the grounds of "
            "arrest, 2) Inform a friend/relative, 3) Meet an advocate of your choice, 4) Be produced before "
            "a magistrate within 24 hours, 5) Medical examination, and 6) Not be subjected to unnecessary "
            "restraint or torture.",
        "file for divorce": "To file for divorce in India, you need to: 1) Have grounds for divorce "
            "(cruelty, desertion, etc.), 2) File a petition in the family court, 3) Attempt reconciliation "
            "if ordered by court, 4) Go through trial if contested, 5) Wait for the court's decree. The "
            "process varies based on personal laws (Hindu, Muslim, Christian, etc.).",
        "property registration": "For property registration in India: 1) Execute a sale deed, 2) Pay "
            "appropriate stamp duty, 3) Get the deed registered at the Sub-Registrar's office within 4 "
            "months, 4) Pay registration fee, 5) Get the property mutation done in municipal records for "
            "tax purposes.",
        "legally binding will": "For a legally binding will in India: 1) It must be in writing, 2) Signed "
            "by the testator, 3) Attested by two witnesses, 4) Registration is recommended but not "
            "mandatory, 5) The testator must be of sound mind and not coerced.",
        "starting a business": "Legal steps for starting a business in India: 1) Choose a business "
            "structure (Proprietorship/Partnership/LLP/Company), 2) Register the business name, 3) Get "
            "necessary licenses (GST, Professional Tax, Shop Act), 4) Register under Companies Act if "
            "incorporating, 5) Comply with labor laws if hiring employees.",
    }

    TOPICS: list[tuple[str, re.Pattern[str], str]] = [
        ("bail", re.compile(r"\bbail\b"),
         "Bail is the conditional release of an accused with an assurance to appear in court when "
         "required. Regular bail is sought under Section 437 and 439 CrPC. Anticipatory bail, under "
         "Section 438 CrPC, is sought before arrest. The application needs to be filed with proper "
         "grounds in the appropriate court."),
        ("fir", re.compile(r"\bfir\b|police complaint"),
         "To file an FIR (First Information Report): 1) Go to the police station with jurisdiction, "
         "2) Provide all details of the incident, 3) Get a copy of the FIR with a unique number, 4) If "
         "police refuse to register, approach the Superintendent of Police or file a complaint before "
         "the Magistrate under Section 156(3) CrPC."),
        ("tenancy", re.compile(r"\b(tenant|tenants|landlord|landlords|rent|rental|rented)\b"),
         "Landlord-tenant laws in India vary by state. Generally, a rental agreement should specify "
         "rent, duration, security deposit, and maintenance responsibilities. Eviction requires proper "
         "notice as per the agreement and state laws. Security deposits must be returned after "
         "deducting legitimate costs."),
    ]

    DEFAULT_REPLY = (
        "I can provide general legal information on Indian laws including IPC, CrPC, family law, "
        "property law, etc. For specific legal advice tailored to your situation, please consult with "
        "a qualified advocate who can provide personalized guidance."
    )

    SUGGESTED_QUESTIONS: list[str] = [
        "What are my rights if I'm arrested?",
        "How do I file for divorce in India?",
        "What is the process for property registration?",
        "How can I draft a legally binding will?",
        "What does Section 420 of IPC deal with?",
    ]

    _section_re = re.compile(r"\bsection\s+(\d+[a-z]?)\b", re.IGNORECASE)
    _code_re = re.compile(r"\b(ipc|crpc|cpc|it act|companies act|indian constitution)\b", re.IGNORECASE)

    def reply(self, message: str, *, encrypted: bool = False) -> ChatbotReply:
        if encrypted:
            return ChatbotReply(self.DEFAULT_REPLY, "general")

        query = str(message or "").strip().lower()

        section = self._section_re.search(query)
        if section:
            code = self._code_re.search(query)
            return ChatbotReply(
                self.section_info(section.group(1), code.group(1) if code else None), "section"
            )

        faq = self._best_faq(query)
        if faq is not None:
            return ChatbotReply(faq, "faq")

        for topic, pattern, text in self.TOPICS:
            if pattern.search(query):
                return ChatbotReply(text, topic)

        return ChatbotReply(self.DEFAULT_REPLY, "general")

    def section_info(self, section: str, code: str | None) -> str:
        section = section.lower()
        if code:
            text = self.SECTIONS.get(code.lower(), {}).get(section)
            if text:
                return text
            label = f"Section {section.upper()} of {code.upper()}"
        else:
            label = f"Section {section.upper()}"
        return (
            f"I don't have specific information about {label}. For accurate information, please "
            "consult a legal professional or refer to the official legal texts."
        )

    def _best_faq(self, query: str) -> str | None:
        matches = [key for key in self.FAQS if key in query]
        if not matches:
            return None
        return self.FAQS[max(matches, key=len)]

    def suggested_questions(self) -> list[str]:
        return list(self.SUGGESTED_QUESTIONS)


legal_chatbot = LegalChatbot()
