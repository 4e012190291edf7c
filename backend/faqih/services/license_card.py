"""Printable medical-religious license card (HTML)."""

import html

from faqih.models.schemas import PatientLicenseData

# Brand colors (from frontend theme)
_BG = "#F8FAFC"
_PRIMARY = "#0F766E"
_TEXT = "#1F2937"
_MUTED = "#6B7280"
_BORDER = "#E5E7EB"
_ALERT = "#DC2626"


def _field(label_ar: str, label_en: str, value: str, size: str = "18px", color: str = _TEXT) -> str:
    return f"""\
      <div style="border-bottom:2px dashed {_BORDER};padding-bottom:14px;margin-bottom:14px;">
        <p style="margin:0 0 4px;font-size:13px;color:{_MUTED};">{label_ar} / {label_en}</p>
        <p style="margin:0;font-size:{size};font-weight:700;color:{color};">{value}</p>
      </div>"""


def render_license_card(data: PatientLicenseData) -> str:
    """Render ``data`` as a standalone printable HTML page.

    All user-supplied values are HTML-escaped.
    """
    doctor = html.escape(data.doctor_name)
    patient = html.escape(data.patient_name)
    date = html.escape(data.date)
    diagnosis = html.escape(data.diagnosis)
    ruling = html.escape(data.ruling_summary)

    return f"""\
<!DOCTYPE html>
<html lang="ar" dir="rtl">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>رخصة طبية شرعية</title>
  <style>@media print {{ .no-print {{ display:none; }} }}</style>
</head>
<body style="margin:0;padding:24px;background-color:{_BG};font-family:Tajawal,'Segoe UI',Arial,sans-serif;">
  <div style="max-width:560px;margin:0 auto;background:#FFFFFF;border-radius:12px;overflow:hidden;border:1px solid {_BORDER};">

    <!-- Header -->
    <div style="background-color:{_PRIMARY};color:#FFFFFF;text-align:center;padding:24px;">
      <h2 style="margin:0 0 4px;font-size:24px;font-family:Amiri,Georgia,serif;">رخصة طبية شرعية</h2>
      <p style="margin:0;font-size:14px;opacity:0.9;">Medical-Religious Exemption Card</p>
    </div>

    <div style="padding:32px;">
{_field("الطبيب المعالج", "Attending Physician", doctor)}
{_field("اسم المريض", "Patient Name", patient, size="20px")}
{_field("التاريخ", "Date", date, size="16px")}
{_field("التشخيص", "Diagnosis", diagnosis, size="16px", color=_ALERT)}

      <div style="background:{_BG};border:1px solid {_BORDER};border-radius:8px;padding:16px;">
        <p style="margin:0 0 8px;font-size:12px;font-weight:700;color:{_MUTED};">الرأي الشرعي الطبي / Ruling</p>
        <p style="margin:0;font-size:14px;line-height:1.7;color:{_TEXT};">{ruling}</p>
        <div style="margin-top:16px;padding-top:16px;border-top:1px solid {_BORDER};display:flex;justify-content:space-between;">
          <span style="font-size:12px;color:{_MUTED};">تطبيق الطبيب الفقيه</span>
          <span style="font-size:12px;font-weight:700;color:{_PRIMARY};">معتمد استناداً للفتاوى الرسمية</span>
        </div>
      </div>
    </div>

    <div class="no-print" style="padding:16px;text-align:center;">
      <button onclick="window.print()" style="padding:12px 24px;background:{_PRIMARY};color:#FFFFFF;border:none;border-radius:8px;font-size:15px;">طباعة البطاقة</button>
    </div>
  </div>
</body>
</html>
"""
