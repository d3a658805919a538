import streamlit as st
import plotly.express as px

from docrank.errors import DocRankError
from docrank.evaluation.processor import process_all
from docrank.evaluation.results import sort_results, status_of, summarize_results
from docrank.utils.document_reader import UploadedFile
from docrank.utils.io import filter_supported


STATUS_ICONS = {
    "pending": "⏳",
    "processing": "🔄",
    "completed": "✅",
    "error": "❌",
}


def to_uploads(files):
    return [UploadedFile(name=f.name, data=f.getvalue(), mime_type=f.type) for f in files]


st.set_page_config(page_title="Document Ranking", layout="wide")

st.title("📄 Document Ranking & Summaries")
st.markdown("Supported formats: PDF, TXT, DOCX (Max 10MB per file)")
st.markdown("---")

files = st.file_uploader(
    "Drag & drop your documents",
    type=["pdf", "txt", "docx"],
    accept_multiple_files=True,
)

uploads = filter_supported(to_uploads(files or []))
if files and len(uploads) < len(files):
    st.warning(f"{len(files) - len(uploads)} file(s) skipped: unsupported type or larger than 10MB")

if uploads:
    st.subheader(f"Selected Documents ({len(uploads)})")
    for u in uploads:
        st.write(f"**{u.name}** · {u.size / 1024 / 1024:.2f} MB")

if st.button("Process documents", disabled=not uploads, width="stretch"):
    st.session_state.pop("results", None)

    progress = st.progress(0, text="Processing documents with your AI assistant...")
    status_box = st.empty()
    # One slot per upload position; names may repeat
    statuses = ["pending"] * len(uploads)

    def on_status(index, name, status, message):
        statuses[index] = status
        done = sum(1 for s in statuses if s in ("completed", "error"))
        progress.progress(done / len(statuses), text=f"{done}/{len(statuses)} documents processed")
        status_box.markdown("  \n".join(
            f"{STATUS_ICONS[s]} {u.name}" for u, s in zip(uploads, statuses)
        ))

    try:
        st.session_state["results"] = process_all(uploads, on_status=on_status)
    except DocRankError as e:
        st.error(str(e))
    finally:
        progress.progress(1.0)

results = st.session_state.get("results")

if results:
    st.markdown("---")
    stats = summarize_results(results)

    c1, c2, c3 = st.columns(3)
    c1.metric("Documents", stats["documents"])
    c2.metric("Errors", stats["errors"])
    c3.metric("Mean ranking", stats["mean_ranking"])

    # Sort controls (default: ranking, highest first)
    field = st.sidebar.selectbox("Sort by:", ["ranking", "fileName"])
    descending = st.sidebar.radio("Direction:", ["desc", "asc"]) == "desc"
    ordered = sort_results(results, field=field, descending=descending)

    st.subheader("📊 Results")
    st.dataframe([r.to_dict() for r in ordered], width="stretch", hide_index=True)

    fig = px.bar(
        x=[r.file_name for r in ordered],
        y=[r.ranking for r in ordered],
        range_y=[0, 10],
        labels={"x": "Document", "y": "Ranking"},
    )
    st.plotly_chart(fig, width="stretch")

    for r in ordered:
        status = status_of(r)
        if status["status"] == "error":
            with st.expander(f"{STATUS_ICONS['error']} {r.file_name}"):
                st.write(status["message"])
