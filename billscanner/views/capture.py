import streamlit as st

from billscanner.capture import from_upload
from billscanner.controller import ReceiptController

UPLOAD_TYPES = ["jpg", "jpeg", "png", "webp", "heic"]


def show_preview(data_uri: str):
    st.markdown(
        f'<img src="{data_uri}" alt="Receipt" style="width:100%;border-radius:12px;" />',
        unsafe_allow_html=True,
    )


def main(controller: ReceiptController):
    state = controller.state

    # === RECEIPT UPLOAD ===
    use_camera = st.toggle("📷 Use camera", key="use_camera")
    key = f"receipt_upload_{state.uploader_generation}"
    if use_camera:
        uploaded = st.camera_input("Take a photo of the receipt", key=key)
    else:
        uploaded = st.file_uploader(
            "📸 Tap to photograph a receipt / tax invoice", type=UPLOAD_TYPES, key=key
        )

    image = from_upload(uploaded)
    if image and image.digest != state.capture_digest:
        with st.spinner("Scanning receipt..."):
            show_preview(image.data_uri)
            controller.scan(image)
    elif state.image_preview:
        show_preview(state.image_preview)
    else:
        st.caption("Supports .jpg, .png")
