import logging
from datetime import datetime, timezone
import streamlit as st
from core.auth import AuthError, Session, authenticate, logout, require_session, server_mode
from core.intake import manual_entry, upload_entry
from core.registry import configure_logging, load_config, load_enabled_modules, module_options
from core.report import build_pdf
from core.sources import demo_record, reopen_report, report_table, store_report
from core.types import HealthRecord, validate_record

cfg = load_config()
configure_logging(cfg)
logger = logging.getLogger("app")

st.set_page_config(page_title=cfg["app"]["title"], layout="wide")

# ?health -> status page only
if "health" in st.query_params:
    st.header("System status")
    st.write("✅ Frontend: Operational")
    st.write("🔄 Backend: " + ("Connected" if server_mode(cfg["auth"]) else "Client-side mode"))
    st.write(f"📅 {datetime.now(timezone.utc).isoformat()}")
    st.stop()

ss = st.session_state
ss.setdefault("session", Session.anonymous())
ss.setdefault("reports", [])
ss.setdefault("record", None)
ss.setdefault("record_rev", 0)


def load_record(record: HealthRecord) -> None:
    ss.record = record
    ss.record_rev += 1


# 1) Login gate
if not ss.session.authenticated:
    st.title(cfg["app"]["title"])
    with st.form("login"):
        password = st.text_input("System password", type="password")
        country = st.selectbox("Country", cfg["auth"]["countries"], index=None, placeholder="Select country")
        submitted = st.form_submit_button("Log in")
    if submitted:
        res = authenticate(password, country or "", cfg["auth"])
        if res.ok:
            ss.session = res.session
            st.rerun()
        st.error(res.error)
    st.stop()

with st.sidebar:
    st.markdown(f"**Country:** {ss.session.country}")
    if st.button("Log out"):
        ss.session = logout(ss.session)
        # assessment state lives only as long as the login
        for k in [k for k in ss.keys() if k != "session"]:
            del ss[k]
        st.rerun()

st.title(cfg["app"]["title"])

try:
    require_session(ss.session)
except AuthError as e:
    st.warning(str(e))
    st.stop()

# 2) Pick a data source
method = st.radio("Assessment method", ["Manual entry", "Upload files", "Demo client", "Existing reports"], horizontal=True)

if method == "Manual entry":
    rec = manual_entry()
    if rec is not None:
        load_record(rec)
elif method == "Upload files":
    rec = upload_entry()
    if rec is not None:
        load_record(rec)
elif method == "Demo client":
    if st.button("Load demo client"):
        load_record(demo_record())
else:
    if not ss.reports:
        st.info("No reports yet in this session.")
    else:
        labels = [f"{r['client']} — {r['method']} — {r['timestamp'][:19]}" for r in ss.reports]
        pick = st.selectbox("Saved reports", range(len(labels)), format_func=lambda i: labels[i])
        saved = report_table(ss.reports[pick])
        if saved:
            st.table(saved)
        if st.button("Open report"):
            load_record(reopen_report(ss.reports[pick]))

record = ss.record
if record is None:
    st.caption(cfg["app"]["disclaimer"])
    st.stop()

# 3) Boundary validation; scores still run and skip what they cannot compute
for problem in validate_record(record):
    logger.warning("invalid record field: %s", problem)
    st.warning(problem)

st.markdown(f"**Client:** {record.demographics.name or '—'} &nbsp; **Source:** {record.method or '—'}")

# 4) Run enabled modules
modules = load_enabled_modules(cfg)

all_rows = []
for mod in modules:
    with st.expander(mod.title, expanded=True):
        record = mod.inputs(record)
        results = mod.compute(record, module_options(cfg, mod.id))
        mod.render(results)
        all_rows += mod.to_pdf(results)

# 5) Consolidated PDF + session copy
pdf_bytes = build_pdf(record=record, rows=all_rows, country=ss.session.country, disclaimer=cfg["app"]["disclaimer"])
c1, c2 = st.columns(2)
with c1:
    st.download_button("Download PDF Report", data=pdf_bytes, file_name="health_report.pdf", mime="application/pdf")
with c2:
    if st.button("Save report to session"):
        store_report(ss.reports, record, all_rows)
        st.success("Saved. Reopen it under 'Existing reports'.")

st.caption(f"Disclaimer: {cfg['app']['disclaimer']}")
