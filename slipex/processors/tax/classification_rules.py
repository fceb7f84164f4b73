"""
Document Classification Rule Tables

Two tiers:
- SCORING_RULES: keyword lists (1 point each) and structural patterns
  (2 points each) per type.
- FALLBACK_PATTERNS: one strict structural pattern per type, tried in
  order when no scored type clears the threshold.

Table order is observable: equal scores resolve to the earlier entry and
the fallback takes the first matching pattern.
"""

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

from slipex.models.tax_document import DocumentType


@dataclass(frozen=True)
class ClassificationRule:
    """Keywords and structural patterns that vote for one document type"""
    document_type: DocumentType
    keywords: Tuple[str, ...]
    patterns: Tuple[Pattern[str], ...]

    def score(self, text: str, lowered: str, filename: str = '') -> int:
        """
        Score normalized text for this type.

        Args:
            text: Whitespace-normalized text
            lowered: The same text lower-cased
            filename: Lower-cased filename hint
        """
        score = sum(1 for keyword in self.keywords if keyword in lowered)
        score += sum(2 for pattern in self.patterns if pattern.search(text))
        if filename and self.document_type.hint_key in filename:
            score += 1
        return score


def scored(document_type: DocumentType, keywords: Tuple[str, ...], *patterns: str) -> ClassificationRule:
    return ClassificationRule(
        document_type,
        tuple(keyword.lower() for keyword in keywords),
        tuple(re.compile(p, re.IGNORECASE) for p in patterns),
    )


SCORING_RULES: Tuple[ClassificationRule, ...] = (
    scored(
        DocumentType.T4,
        ('t4', 'statement of remuneration', 'employment income', 'box 14'),
        r'(?:T4|Statement\s+of\s+Remuneration)',
        r'Box\s+14',
        r'Employment\s+Income',
    ),
    scored(
        DocumentType.RL1,
        ('rl-1', 'rl1', 'relevé 1', "revenu d'emploi", 'case a'),
        r'(?:RL-1|Relevé\s+1)',
        r'Case\s+A',
        r'Revenu.*emploi',
    ),
    scored(
        DocumentType.UBER_SUMMARY,
        (
            'uber', 'driver partner', 'weekly summary', 'trip earnings', 'gross fare',
            'tax summary for the period', 'gross fares breakdown', 'fees breakdown',
            'uber rides', 'uber eats',
        ),
        r'uber.*partner',
        r'weekly.*summary',
        r'gross.*fare',
        r'uber\.com',
        r'tax\s+summary\s+for\s+the\s+period',
        r'GROSS\s+FARES\s+BREAKDOWN',
    ),
    scored(
        DocumentType.LYFT_SUMMARY,
        ('lyft', 'weekly summary', 'driver dashboard', 'ride earnings'),
        r'lyft.*driver',
        r'weekly.*earning',
        r'total.*payout',
        r'lyft\.com',
    ),
    scored(
        DocumentType.GAS_RECEIPT,
        (
            'shell', 'esso', 'petro', 'ultramar', 'irving', 'canadian tire', 'costco',
            'gas', 'fuel', 'essence', 'gasoline', 'liters', 'litres',
        ),
        r'(shell|esso|petro-canada|ultramar|irving|canadian tire|costco)',
        r'fuel|gas|essence',
        r'liters?|litres?',
    ),
    scored(
        DocumentType.MAINTENANCE_RECEIPT,
        (
            'oil change', 'vidange', 'tire', 'pneu', 'brake', 'frein', 'service', 'repair',
            'réparation', 'maintenance', 'canadian tire', 'midas', 'mr. lube', 'jiffy lube',
        ),
        r'oil.*change|vidange',
        r'tire.*service|pneu',
        r'brake.*repair|frein',
        r"labor|labour|main-d'œuvre",
    ),
    scored(
        DocumentType.INSURANCE_RECEIPT,
        (
            'insurance', 'assurance', 'intact', 'desjardins', 'belair', 'bélairdirect',
            'td insurance', 'aviva', 'la capitale', 'premium', 'prime',
        ),
        r'(intact|desjardins|bélairdirect|td insurance|aviva|la capitale)',
        r'prime|premium|monthly payment',
        r'coverage period|période',
    ),
    # Listed last so ties with T4 and RL-1 still resolve to those slips
    scored(
        DocumentType.T4A,
        ('t4a', 'statement of pension', 'annuity', 'pension, retirement'),
        r'T4A',
        r'Statement\s+of\s+Pension',
    ),
    scored(
        DocumentType.RL2,
        ('rl-2', 'rl2', 'relevé 2', 'prestations de retraite', 'rentes'),
        r'(?:RL-2|Relevé\s+2)',
        r'(?:Pension|retraite|Retirement)',
    ),
)

FALLBACK_PATTERNS: Tuple[Tuple[DocumentType, Pattern[str]], ...] = tuple(
    (document_type, re.compile(pattern, re.IGNORECASE | re.DOTALL))
    for document_type, pattern in (
        (DocumentType.T4, r'(?:T4|Statement\s+of\s+Remuneration).*(?:Box\s+14|Employment\s+Income)'),
        (DocumentType.T4A, r'(?:T4A|Statement\s+of\s+Pension).*(?:Box\s+16|Box\s+18)'),
        (DocumentType.RL1, r'(?:RL-1|Relevé\s+1).*(?:Case\s+A|Box\s+A)'),
        (DocumentType.RL2, r'(?:RL-2|Relevé\s+2).*(?:Case\s+A|Pension)'),
        (
            DocumentType.UBER_SUMMARY,
            r'(?:Uber|uber\.com).*(?:Gross\s+Fares?|Weekly\s+Summary|Driver\s+Summary|'
            r'Tax\s+summary\s+for\s+the\s+period|GROSS\s+FARES\s+BREAKDOWN|FEES\s+BREAKDOWN)',
        ),
        (DocumentType.LYFT_SUMMARY, r'(?:Lyft|lyft\.com).*(?:Driver\s+Earnings?|Weekly\s+Summary)'),
        (DocumentType.TAXI_STATEMENT, r'(?:Taxi|Cab|Dispatch).*(?:Gross\s+Income|Commission)'),
        (
            DocumentType.GAS_RECEIPT,
            r'(?:Shell|Esso|Petro-Canada|Ultramar|Irving|Canadian Tire|Costco|Gas|Fuel|Essence|Gasoline)'
            r'.*(?:Liters?|Litres?|L\s)',
        ),
        (
            DocumentType.MAINTENANCE_RECEIPT,
            r'(?:Oil\s+Change|Vidange|Tire|Pneu|Brake|Frein|Repair|Réparation|Service|Canadian Tire|'
            r"Midas|Mr\.\s+Lube|Jiffy Lube).*(?:Labor|Labour|Main-d'œuvre|Parts|Pièces)",
        ),
        (
            DocumentType.INSURANCE_RECEIPT,
            r'(?:Intact|Desjardins|Bélairdirect|TD Insurance|Aviva|La Capitale)'
            r'.*(?:Prime|Premium|Monthly Payment|Coverage Period|Période)',
        ),
        (DocumentType.INSURANCE_DOC, r'(?:Insurance|Assurance|Policy).*(?:Premium|Coverage|Effective\s+Date)'),
        (DocumentType.PARKING_RECEIPT, r'(?:Parking|Park).*(?:Duration|Zone)'),
        (
            DocumentType.PHONE_BILL,
            r'(?:Wireless|Mobile|Cell|Phone|Rogers|Bell|Telus|Fido).*(?:Billing\s+Period|Data\s+Usage)',
        ),
        (DocumentType.MEAL_RECEIPT, r"(?:Restaurant|Café|Coffee|Food|Tim\s+Hortons|McDonald's).*(?:Subtotal|Tip)"),
    )
)
