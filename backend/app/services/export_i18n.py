"""Translation dictionary for aging report exports (en/ar)."""
from __future__ import annotations

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        # Common
        "as_of": "As of",
        "total": "Total",
        "n_a": "N/A",

        # Titles
        "receivable_aging": "Accounts Receivable Aging",
        "payable_aging": "Accounts Payable Aging",
        "total_receivable": "Total Outstanding Receivables",
        "total_payable": "Total Outstanding Payables",
        "no_receivable": "No outstanding receivables found",
        "no_payable": "No outstanding payables found",

        # Summary table
        "bucket": "Aging Period",
        "count": "Records",
        "amount": "Amount",
        "percentage": "% of Total",

        # Buckets
        "current": "Current",
        "days30": "1-30 Days",
        "days60": "31-60 Days",
        "days90": "61-90 Days",
        "over90": "90+ Days",

        # Detail columns
        "invoice_number": "Invoice Number",
        "order_number": "Order Number",
        "customer_name": "Customer Name",
        "supplier_name": "Supplier Name",
        "transaction_date": "Transaction Date",
        "order_date": "Order Date",
        "due_date": "Due Date",
        "outstanding_amount": "Outstanding Amount",
        "currency": "Currency",
        "days_overdue": "Days Overdue",
        "status": "Status",
        "unknown_customer": "Unknown Customer",
        "unknown_supplier": "Unknown Supplier",
    },
    "ar": {
        # Common
        "as_of": "كما في",
        "total": "الإجمالي",
        "n_a": "غير متوفر",

        # Titles
        "receivable_aging": "تقادم الذمم المدينة",
        "payable_aging": "تقادم الذمم الدائنة",
        "total_receivable": "إجمالي الذمم المدينة المستحقة",
        "total_payable": "إجمالي الذمم الدائنة المستحقة",
        "no_receivable": "لا توجد ذمم مدينة مستحقة",
        "no_payable": "لا توجد ذمم دائنة مستحقة",

        # Summary table
        "bucket": "فترة التقادم",
        "count": "عدد السجلات",
        "amount": "المبلغ",
        "percentage": "% من الإجمالي",

        # Buckets
        "current": "جاري",
        "days30": "1-30 يوم",
        "days60": "31-60 يوم",
        "days90": "61-90 يوم",
        "over90": "أكثر من 90 يوم",

        # Detail columns
        "invoice_number": "رقم الفاتورة",
        "order_number": "رقم أمر الشراء",
        "customer_name": "اسم العميل",
        "supplier_name": "اسم المورد",
        "transaction_date": "تاريخ المعاملة",
        "order_date": "تاريخ الطلب",
        "due_date": "تاريخ الاستحقاق",
        "outstanding_amount": "المبلغ المستحق",
        "currency": "العملة",
        "days_overdue": "أيام التأخير",
        "status": "الحالة",
        "unknown_customer": "عميل غير معروف",
        "unknown_supplier": "مورد غير معروف",
    },
}


def t(lang: str, key: str) -> str:
    """Get translated label. Falls back to English."""
    return TRANSLATIONS.get(lang, TRANSLATIONS["en"]).get(
        key, TRANSLATIONS["en"].get(key, key)
    )
