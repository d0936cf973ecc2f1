import streamlit as st

from form_client.form import ApplicationFormState
from validation import APPLICATION_TYPES, MAX_RESUME_SIZE_MB, RESUME_FIELD

st.set_page_config(page_title="Resume Collector")

if "form" not in st.session_state:
    st.session_state.form = ApplicationFormState()
# Widget keys are bumped after a successful submit so the inputs come back empty.
if "form_version" not in st.session_state:
    st.session_state.form_version = 0

form: ApplicationFormState = st.session_state.form
version = st.session_state.form_version

st.title("Resume Collector")

if form.banner:
    if form.banner.kind == "success":
        st.success(form.banner.text)
    else:
        st.error(form.banner.text)


def _on_change(name: str):
    form.handle_change(name, st.session_state[f"{name}-{version}"])


def _field_error(name: str):
    if form.errors.get(name):
        st.caption(f":red[{form.errors[name]}]")


def _text_input(label: str, name: str):
    st.text_input(
        label,
        value=form.fields[name],
        key=f"{name}-{version}",
        on_change=_on_change,
        args=(name,),
    )
    _field_error(name)


_text_input("Name", "name")
_text_input("Contact Number", "contactNumber")
_text_input("Email", "email")

st.selectbox(
    "Application Type",
    APPLICATION_TYPES,
    index=APPLICATION_TYPES.index(form.fields["applicationType"]),
    format_func=lambda value: f"{value} Application",
    key=f"applicationType-{version}",
    on_change=_on_change,
    args=("applicationType",),
)

_text_input("Job Title", "jobTitle")
_text_input("Interested Areas (Optional)", "interestedAreas")

uploaded = st.file_uploader(
    f"Resume (PDF/DOC/DOCX - Max {MAX_RESUME_SIZE_MB}MB)",
    type=["pdf", "doc", "docx"],
    key=f"{RESUME_FIELD}-{version}",
    help=form.file_label,
)
if uploaded is None:
    form.resume = None
else:
    content = uploaded.getvalue()
    if form.resume is None or not form.resume.matches(uploaded.name, content):
        form.select_file(uploaded.name, uploaded.type, content)
_field_error(RESUME_FIELD)

if st.button("Submit Application", type="primary"):
    if form.submit():
        st.session_state.form_version += 1
    st.rerun()
