import pytest

from statement_recon.models import BankRecord, UserTransaction

# Sample statements for each supported layout
semicolon_statement = (
    'Date;Description;Amount;Type\n'
    '15.01.2024;Supermarket;50,00;Debit\n'
    '16.01.2024;Salary;2500,00;Credit\n'
)

german_statement = (
    'Datum,Beschreibung,Betrag\n'
    '2024-01-05,Miete,-800.00\n'
    '2024-01-06,Gehalt,2500.00\n'
)

tab_statement = (
    'Date\tMemo\tAmount\n'
    '2024-01-05\tCoffee\t-3.50\n'
)

comma_statement = (
    '"Date","Description","Amount"\n'
    '"2024-01-05","Grocery Store","-50.00"\n'
    '"2024-01-06","Paycheck","1200.00"\n'
    '"not-a-date","Broken Row","-10.00"\n'
    '"2024-01-07","Bad Amount","n/a"\n'
)


@pytest.fixture
def make_user_tx():
    """Factory for user transactions with sensible defaults."""
    counter = {'n': 0}

    def _make(date='2024-01-05', amount=50.00, kind='expense', category='Groceries',
              description='Grocery Store', id=None):
        counter['n'] += 1
        return UserTransaction(
            id=id or f"tx-{counter['n']}",
            date=date,
            amount=amount,
            category=category,
            kind=kind,
            description=description,
        )
    return _make


@pytest.fixture
def make_bank_record():
    """Factory for bank records with sensible defaults."""
    def _make(date='2024-01-05', amount=50.00, flow='debit', description='GROCERY STORE'):
        return BankRecord(date=date, description=description, amount=amount, flow=flow)
    return _make


@pytest.fixture
def statements():
    return {
        'semicolon': semicolon_statement,
        'german': german_statement,
        'tab': tab_statement,
        'comma': comma_statement,
    }


@pytest.fixture
def transactions_csv(tmp_path):
    """Recorded transactions export matching the comma sample statement."""
    path = tmp_path / 'transactions.csv'
    path.write_text(
        'id,date,amount,category,kind,description,owner\n'
        't1,2024-01-05,50.00,Groceries,expense,Grocery Store,alice\n'
        't2,2024-01-06,1250.00,Salary,income,Paycheck,alice\n'
        't3,2024-01-09,20.00,Dining,expense,"Lunch, with ""Bob""",alice\n'
        't4,2024-01-05,99.00,Other,expense,Someone else,bob\n',
        encoding='utf-8',
    )
    return path


@pytest.fixture
def statement_csv(tmp_path):
    path = tmp_path / 'statement.csv'
    path.write_text(comma_statement, encoding='utf-8')
    return path
