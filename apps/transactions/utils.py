import re
import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from io import BytesIO
from datetime import datetime
from decimal import Decimal

EXPORT_HEADERS = [
    'ID', 'เวลา', 'Username', 'ประเภท', 'จำนวนเงิน', 'โบนัส',
    'ช่องทาง', 'Auto/Manual', 'สถานะ', 'Admin', 'หมายเหตุ',
]

# 시트 이름에 쓸 수 없는 문자
INVALID_SHEET_CHARS = re.compile(r'[\\/*?:\[\]]')

TYPE_LABELS = {'deposit': 'ฝาก', 'withdraw': 'ถอน'}


def to_excel_number(value):
    """Decimal/문자열 금액 → float (엑셀 호환), 비어있으면 0"""
    if value is None or value == '':
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(Decimal(str(value)))
    except (ArithmeticError, ValueError):
        return 0


def to_excel_text(value):
    """사이트 DB 자유 입력값 → 셀 문자열 (엑셀에 쓸 수 없는 제어문자 제거)"""
    if value is None:
        return ''
    return ILLEGAL_CHARACTERS_RE.sub('', str(value))


def payment_label(row):
    return 'TrueMoney' if row.get('tmw') == 1 else 'Bank'


def auto_label(row):
    return 'Auto' if row.get('isAuto') == 1 else 'Manual'


def status_label(row):
    return 'สำเร็จ' if row.get('status') == 1 else 'รอดำเนินการ'


def export_transactions_to_excel(rows, sheet_title='รายการ'):
    """
    조회된 거래 행(dict) 을 11열 엑셀로 내보내기

    Returns:
        BytesIO (seek(0) 완료)
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = INVALID_SHEET_CHARS.sub('_', to_excel_text(sheet_title))[:31] or 'รายการ'

    ws.append(EXPORT_HEADERS)

    for row in rows:
        timestamp = row.get('timestamp')
        if isinstance(timestamp, datetime):
            timestamp = timestamp.strftime('%Y-%m-%d %H:%M:%S')

        ws.append([
            row.get('id'),
            to_excel_text(timestamp),
            to_excel_text(row.get('username')),
            TYPE_LABELS.get(row.get('type_tran'), to_excel_text(row.get('type_tran'))),
            to_excel_number(row.get('amount')),
            to_excel_number(row.get('bonus')),
            payment_label(row),
            auto_label(row),
            status_label(row),
            to_excel_text(row.get('admin')),
            to_excel_text(row.get('note')),
        ])

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
