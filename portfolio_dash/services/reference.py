from typing import Dict

DEFAULT_SECTOR = "Technology"

COMPANY_NAMES: Dict[str, str] = {
    'RELIANCE': 'Reliance Industries Limited',
    'INFY': 'Infosys Limited',
    'TCS': 'Tata Consultancy Services',
    'HDFCBANK': 'HDFC Bank Limited',
    'ITC': 'ITC Limited',
    'GOLDBEES': 'Gold Exchange Traded Fund',
    'NIFTYIETF': 'Nifty Index ETF',
    'TATAMOTORS': 'Tata Motors Limited',
    'JSWSTEEL': 'JSW Steel Limited',
    'ADANIPORTS': 'Adani Ports and SEZ Limited',
}

SECTORS: Dict[str, str] = {
    'RELIANCE': 'Energy',
    'INFY': 'Technology',
    'TCS': 'Technology',
    'HDFCBANK': 'Banking',
    'ITC': 'Consumer Goods',
    'TATAMOTORS': 'Automotive',
    'JSWSTEEL': 'Metals',
    'ADANIPORTS': 'Infrastructure',
}


def get_company_name(instrument: str) -> str:
    return COMPANY_NAMES.get(instrument.upper(), instrument)


def get_sector(instrument: str) -> str:
    return SECTORS.get(instrument.upper(), DEFAULT_SECTOR)
