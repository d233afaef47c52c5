import os
import uuid


# Generate random filename
def generate_filename(filename: str) -> str:
    file_extension = os.path.splitext(filename or "")[1].lower()

    # Random uuid name, original extension kept for the decoder
    return str(uuid.uuid4()) + file_extension


# Save received file to folder
def save_upload(file, upload_folder: str) -> str:
    if not os.path.exists(upload_folder):
        os.makedirs(upload_folder)

    filename = os.path.join(upload_folder, generate_filename(file.filename))
    file.save(filename)
    return filename


def remove_upload(path: str):
    if path and os.path.exists(path):
        os.remove(path)
